"""
Value object base.

Value objects carry no identity: two of them are interchangeable whenever
their fields match. Subclasses are frozen dataclasses, which supplies the
field-wise equality and hashing, and validate their fields in
``__post_init__``.

Example:
    @dataclass(frozen=True)
    class ChoiceOption(ValueObject):
        identifier: str
        text: str = ""
"""


class ValueObject:
    """Marker base for immutable, field-compared domain values."""
