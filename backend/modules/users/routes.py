"""
Admin user search endpoint.

Same search as the regular admin users listing, with each user's
brute-force protection status attached.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_user_search_service
from api.middleware.auth import get_permission_evaluator
from modules.auth.interfaces import IUserPermissionEvaluator
from shared.exceptions import AuthorizationError

from .exceptions import RealmNotFoundError
from .interfaces import IUserSearchService
from .models import BruteUser, UserSearchParams

router = APIRouter()


@router.get("", response_model=list[BruteUser], response_model_exclude_none=True)
def search_users(
    realm: str,
    search: Optional[str] = Query(
        default=None,
        description='Free text over username, email and names, or "id:<user id>"',
    ),
    last_name: Optional[str] = Query(default=None, alias="lastName"),
    first_name: Optional[str] = Query(default=None, alias="firstName"),
    email: Optional[str] = Query(default=None),
    username: Optional[str] = Query(default=None),
    email_verified: Optional[bool] = Query(default=None, alias="emailVerified"),
    phone_number_locale: Optional[str] = Query(default=None, alias="phoneNumberLocale"),
    phone_number: Optional[str] = Query(default=None, alias="phoneNumber"),
    phone_number_verified: Optional[bool] = Query(default=None, alias="phoneNumberVerified"),
    idp_alias: Optional[str] = Query(default=None, alias="idpAlias"),
    idp_user_id: Optional[str] = Query(default=None, alias="idpUserId"),
    first_result: int = Query(default=-1, alias="first", description="Offset, -1 for none"),
    max_results: Optional[int] = Query(default=None, alias="max", description="Page size"),
    enabled: Optional[bool] = Query(default=None),
    brief_representation: Optional[bool] = Query(default=None, alias="briefRepresentation"),
    exact: Optional[bool] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Attribute query, key:value pairs"),
    evaluator: IUserPermissionEvaluator = Depends(get_permission_evaluator),
    service: IUserSearchService = Depends(get_user_search_service),
) -> list[BruteUser]:
    """
    Find users and add whether they are locked by brute force protection.

    Only users the caller may view are returned. An "id:" search that
    matches nothing returns an empty list.
    """
    params = UserSearchParams(
        search=search,
        last_name=last_name,
        first_name=first_name,
        email=email,
        username=username,
        email_verified=email_verified,
        phone_number_locale=phone_number_locale,
        phone_number=phone_number,
        phone_number_verified=phone_number_verified,
        idp_alias=idp_alias,
        idp_user_id=idp_user_id,
        first=first_result,
        max=max_results,
        enabled=enabled,
        brief_representation=brief_representation,
        exact=exact,
        q=q,
    )

    try:
        return list(service.search_users(realm, params, evaluator))
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except RealmNotFoundError:
        raise HTTPException(status_code=404, detail="Realm not found")
