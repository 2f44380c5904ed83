"""Request identity — either an authenticated user or anonymous."""

from dataclasses import dataclass
from typing import Union

from workout_api.domain.models.user import User


@dataclass(frozen=True)
class Authenticated:
    user: User


@dataclass(frozen=True)
class Anonymous:
    pass


Identity = Union[Authenticated, Anonymous]

ANONYMOUS = Anonymous()


def is_anonymous(identity: Identity) -> bool:
    return isinstance(identity, Anonymous)
