from .users import (
    AuthenticatedUserResource,
    SignInUserResource,
    SignUpUserResource,
    UpdateUserPasswordResource,
    UpdateUserProfileResource,
    UserResource,
)

__all__ = [
    'AuthenticatedUserResource',
    'SignInUserResource',
    'SignUpUserResource',
    'UpdateUserPasswordResource',
    'UpdateUserProfileResource',
    'UserResource',
]
