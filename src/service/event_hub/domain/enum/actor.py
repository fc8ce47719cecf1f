from enum import StrEnum


class Actor(StrEnum):
    """Who is asking for a change: the event's initiator or a moderator."""

    OWNER = 'owner'
    ADMIN = 'admin'
