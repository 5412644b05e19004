"""Python code generator for debug formatting routines."""

import logging
from collections.abc import Iterable
from importlib import resources

from jinja2 import Environment, PackageLoader

from .bounds import check_bounds
from .classify import BuilderForm, EmissionRule, FieldPlan, VariantPlan, plan_type
from .types import FieldStyle, TypeDescriptor

logger = logging.getLogger(__name__)

RUNTIME_FILES = [
    "__init__.py",
    "formatter.py",
]

env = Environment(
    loader=PackageLoader("shortdebug.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("python.py.j2")

_BUILDERS = {
    BuilderForm.STRUCT: "debug_struct",
    BuilderForm.TUPLE: "debug_tuple",
}


def _routine_name(t: TypeDescriptor) -> str:
    return f"_{t.name}_debug_fmt"


def _gen_field_call(plan: FieldPlan, form: BuilderForm) -> str:
    """Generate the builder call for one field, guarded per its emission rule."""
    binding = plan.field.binding

    # Positional fields never carry a label, whatever their classification
    if form == BuilderForm.STRUCT and plan.label is not None:
        call = f'debug_builder.field("{plan.label}", {binding})'
    else:
        call = f"debug_builder.field({binding})"

    if plan.rule == EmissionRule.IF_PRESENT:
        return f"if {binding} is not None:\n    {call}"
    if plan.rule == EmissionRule.IF_NON_EMPTY:
        return f"if len({binding}) > 0:\n    {call}"
    return call


def _gen_pattern(plan: VariantPlan) -> str:
    """Generate the class pattern that binds every field of a variant."""
    fields = [p.field for p in plan.fields]

    if plan.variant.style == FieldStyle.NAMED:
        args = ", ".join(f"{f.name}={f.binding}" for f in fields)
    elif plan.variant.style == FieldStyle.POSITIONAL:
        args = ", ".join(f"{f.binding}" for f in fields)
    else:
        args = ""
    return f"{plan.path}({args})"


def _gen_variant_arm(plan: VariantPlan) -> str:
    """Generate the match arm rendering one variant."""
    builder = _BUILDERS[plan.form]
    lines = [
        f"case {_gen_pattern(plan)}:",
        f'    debug_builder = fmt.{builder}("{plan.variant.name}")',
    ]

    for field_plan in plan.fields:
        for line in _gen_field_call(field_plan, plan.form).split("\n"):
            lines.append("    " + line)

    lines.append("    return debug_builder.finish()")
    return "\n".join(lines)


def render_type(t: TypeDescriptor) -> str:
    """Render the debug formatting routine for one type."""
    lines = [
        f"def {_routine_name(t)}(self, fmt: Formatter) -> None:",
        "    match self:",
    ]

    for plan in plan_type(t):
        for line in _gen_variant_arm(plan).split("\n"):
            lines.append("        " + line)

    lines.append("        case _:")
    lines.append(f'            raise TypeError(f"{{type(self).__name__}} is not a {t.name}")')
    return "\n".join(lines)


def _install_targets(t: TypeDescriptor) -> list[str]:
    """Classes the routine is attached to, one per distinct variant path."""
    targets: list[str] = []
    for variant in t.variants:
        path = t.variant_path(variant)
        if path not in targets:
            targets.append(path)
    return targets


def _imports(types: list[TypeDescriptor]) -> list[tuple[str, list[str]]]:
    """Group the names to import by module, in first-seen module order."""
    modules: dict[str, set[str]] = {}
    for t in types:
        if t.module is None:
            continue
        names = modules.setdefault(t.module, set())
        for target in _install_targets(t):
            names.add(target.split(".")[0])
    return [(module, sorted(names)) for module, names in modules.items()]


def render(
    types: list[TypeDescriptor],
    runtime_import: str = "shortdebug_runtime",
    extern: Iterable[str] = (),
) -> str:
    """Render type descriptors to a Python module of debug formatting routines."""
    check_bounds(types, extern)

    for t in types:
        logger.debug("Rendering %s with %d variant(s)", t.name, len(t.variants))

    return template.render(
        types=types,
        imports=_imports(types),
        gen_routine=render_type,
        routine_name=_routine_name,
        install_targets=_install_targets,
        runtime_import=runtime_import,
    )


def runtime() -> dict[str, str]:
    """Return the Python runtime files as a dict of filename -> content."""
    result: dict[str, str] = {}
    for filename in RUNTIME_FILES:
        content = resources.files("shortdebug.runtime").joinpath(filename).read_text()
        result[filename] = content
    return result
