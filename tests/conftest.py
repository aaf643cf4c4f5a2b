import sys
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "schema_guard"
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from schema_guard import JsonSchemaValidator, RegexCache


@pytest.fixture
def validator() -> JsonSchemaValidator:
    return JsonSchemaValidator(regex_cache=RegexCache(16))
