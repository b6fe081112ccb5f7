"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: object):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidIdentifierError(ValueError):
    """Raised when an identifier cannot be parsed."""

    def __init__(self, entity_type: str, raw_id: str):
        self.entity_type = entity_type
        self.raw_id = raw_id
        super().__init__(f"'{raw_id}' is not a valid {entity_type} id")


class StorageError(Exception):
    """Raised when the snapshot cannot be read from or written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage failure on '{path}': {reason}")
