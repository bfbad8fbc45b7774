"""Account services: the user and credential store."""

from .identity import IdentityStore, parse_user_id

__all__ = ['IdentityStore', 'parse_user_id']
