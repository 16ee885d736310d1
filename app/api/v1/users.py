from fastapi import APIRouter, HTTPException, Request, Response, status
from kink import di

from app.api.v1.schemas import (
    AuthenticatedUserResource,
    SignInUserResource,
    SignUpUserResource,
    UpdateUserPasswordResource,
    UpdateUserProfileResource,
    UserResource,
)
from app.domain.geolocation import LocationService
from app.domain.users import (
    DeleteUserCommand,
    GetUserByEmailQuery,
    GetUserByIdQuery,
    UserCommandService,
    UserQueryService,
)
from app.infrastructure.observability import USER_SIGN_UPS_TOTAL

router = APIRouter(prefix='/users', tags=['users'])


@router.post(
    '/sign-up',
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {'description': 'Invalid input'}},
)
async def sign_up(resource: SignUpUserResource, request: Request) -> UserResource:
    """Register a new user.

    The identificator must be exactly 8 digits, the password at least 5
    characters and the phone number must carry a country prefix
    (e.g. +51987654321). The location is detected from the caller's IP.
    """
    location = await di[LocationService].resolve_location_from_request(request)

    user = await di[UserCommandService].handle(resource.to_command(location))
    if user is None:
        USER_SIGN_UPS_TOTAL.labels('rejected').inc()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='email or identificator already registered',
        )

    USER_SIGN_UPS_TOTAL.labels('created').inc()
    return UserResource.from_entity(user)


@router.post('/sign-in')
async def sign_in(resource: SignInUserResource) -> AuthenticatedUserResource:
    token = await di[UserCommandService].handle(resource.to_command())
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    user = await di[UserQueryService].handle(GetUserByEmailQuery(resource.email))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    return AuthenticatedUserResource.from_entity(user, token)


@router.get('/{user_id}')
async def get_user_by_id(user_id: int) -> UserResource:
    user = await di[UserQueryService].handle(GetUserByIdQuery(user_id))
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    return UserResource.from_entity(user)


@router.put('/{user_id}/profile')
async def update_user_profile(
    user_id: int, resource: UpdateUserProfileResource
) -> UserResource:
    user = await di[UserCommandService].handle(resource.to_command(user_id))
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)

    return UserResource.from_entity(user)


@router.put('/{user_id}/password')
async def update_user_password(
    user_id: int, resource: UpdateUserPasswordResource
) -> Response:
    user = await di[UserCommandService].handle(resource.to_command(user_id))
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)

    return Response(status_code=status.HTTP_200_OK)


@router.delete('/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int) -> Response:
    await di[UserCommandService].handle(DeleteUserCommand(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
