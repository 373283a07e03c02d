"""Base class for value objects such as ids, streak state and quiz questions."""


class ValueObject:
    """
    Immutable object compared by its attributes instead of an identity.

    Subclasses are frozen dataclasses that validate in ``__post_init__``.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(self.__dict__.values()))
