from macroeval.types.undefined import UNDEFINED, UndefinedType
from macroeval.types.bigint import BigInt
from macroeval.types.result import Confident, Unknown, UNKNOWN, EvaluateResult
from macroeval.types.environment import LocalEnvironment
from macroeval.types.state import MacroOptions, MacroState, PackageInfo, owning_package
