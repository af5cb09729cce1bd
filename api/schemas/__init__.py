"""Re-export individual schema modules for easy imports."""

from .account import AccountOut, AccountUpdate, MessageOut, SignupIn, TokenOut
from .auth import LoginIn

__all__ = [
    "AccountOut",
    "AccountUpdate",
    "LoginIn",
    "MessageOut",
    "SignupIn",
    "TokenOut",
]
