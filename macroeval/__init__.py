# Core type aliases for macroeval's data model.
# JavaScript values are plain Python values: str, int/float, bool, None for
# null, the UNDEFINED singleton for undefined, list for arrays and dict for
# plain objects. No wrapper classes are defined for them.
#
# Naming guidance:
# - JSValue: a statically known JavaScript value produced by evaluation.
# - ConfigValue: a JSON-compatible value handed out by the macro handlers.

import logging
from typing import Any

JSValue = Any
ConfigValue = Any

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
