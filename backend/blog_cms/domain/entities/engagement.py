"""Results of engagement operations (likes, saves, per-user status)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LikeResult:
    likes: int
    liked: bool


@dataclass(frozen=True)
class SaveResult:
    saved: bool
    was_already_saved: bool


@dataclass(frozen=True)
class UnsaveResult:
    saved: bool
    was_saved: bool


@dataclass(frozen=True)
class InteractionStatus:
    """Whether a user has liked and/or saved one article."""

    article_id: str
    liked: bool
    saved: bool
