"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidFieldValueError(ValueError):
    """Raised when a service rejects a field value before touching the store.

    Covers the rules the request schemas leave to the services, e.g. an
    action status outside the known lifecycle or a progress value outside
    0..100. The API surfaces it as a failed operation (500).
    """

    def __init__(self, field: str, value: object, message: str):
        self.field = field
        self.value = value
        super().__init__(message)
