"""Closed enumerations shared by the ORM models, schemas and services."""

from enum import Enum


class Role(str, Enum):
    """Principal role. Only two levels exist; there is no hierarchy beyond admin."""

    REGULAR = "REGULAR"
    ADMIN = "ADMIN"


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
