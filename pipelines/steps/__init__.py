# Namespace for pipeline steps
from .validate_entities import ValidateEntities  # noqa: F401
from .dedupe_entities import DedupeEntities  # noqa: F401
