from .get_identity import GetIdentityUseCase, identity_to_response
from .list_identities import ListIdentitiesUseCase
from .update_identity import UpdateIdentityUseCase
from .import_identities import ImportIdentitiesUseCase, parse_identity_csv

__all__ = [
    "GetIdentityUseCase",
    "identity_to_response",
    "ListIdentitiesUseCase",
    "UpdateIdentityUseCase",
    "ImportIdentitiesUseCase",
    "parse_identity_csv",
]
