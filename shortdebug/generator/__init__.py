"""shortdebug code generator."""

from .bounds import UnsupportedFieldTypeError as UnsupportedFieldTypeError
from .bounds import check_bounds as check_bounds
from .classify import BuilderForm as BuilderForm
from .classify import EmissionRule as EmissionRule
from .classify import FieldKind as FieldKind
from .classify import emission_rule as emission_rule
from .classify import plan_type as plan_type
from .classify import select_builder_form as select_builder_form
from .parser import *
from .typeexpr import *
from .types import *
