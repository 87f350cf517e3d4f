"""CLI commands for genesis-tracker."""

from .auth import login, logout, signup, whoami
from .body import body
from .data import data
from .habits import habits
from .images import images
from .init import init
from .nutrition import nutrition
from .profile import profile
from .strength import strength
from .supplements import supplements
from .workouts import workouts

__all__ = [
    "body",
    "data",
    "habits",
    "images",
    "init",
    "login",
    "logout",
    "nutrition",
    "profile",
    "signup",
    "strength",
    "supplements",
    "whoami",
    "workouts",
]
