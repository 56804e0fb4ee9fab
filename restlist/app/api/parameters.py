"""
Parameter configuration API.

Form validation endpoints for the configuration UI and the value
resolution endpoint the host calls when it needs the selectable set.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from restlist.app.dependencies import get_credentials, get_permissions, get_service
from restlist.credentials import CredentialLookup, PermissionChecker
from restlist.models import EndpointSpec
from restlist.service import RestValueService, resolve_values
from restlist.validation import (
    check_credential_id,
    check_filter,
    check_rest_endpoint,
    check_value_expression,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parameters"])


class FieldCheck(BaseModel):
    value: str | None = None
    context: str | None = None


class ExpressionCheck(FieldCheck):
    mime_type: str | None = None


@router.post("/validate/endpoint")
async def validate_endpoint(
    check: FieldCheck,
    permissions: PermissionChecker = Depends(get_permissions),
) -> dict[str, str]:
    return check_rest_endpoint(check.value, check.context, permissions).to_dict()


@router.post("/validate/expression")
async def validate_expression(
    check: ExpressionCheck,
    permissions: PermissionChecker = Depends(get_permissions),
) -> dict[str, str]:
    return check_value_expression(
        check.value, check.mime_type, check.context, permissions
    ).to_dict()


@router.post("/validate/credential")
async def validate_credential(
    check: FieldCheck,
    permissions: PermissionChecker = Depends(get_permissions),
    credentials: CredentialLookup = Depends(get_credentials),
) -> dict[str, str]:
    return check_credential_id(
        check.value, check.context, permissions, credentials
    ).to_dict()


@router.post("/validate/filter")
async def validate_filter(check: FieldCheck) -> dict[str, str]:
    return check_filter(check.value).to_dict()


@router.post("/values")
async def values(
    spec: EndpointSpec,
    credentials: CredentialLookup = Depends(get_credentials),
    service: RestValueService = Depends(get_service),
) -> dict[str, Any]:
    """Resolve an endpoint's values. Failures come back in "error", not as 5xx."""
    result = await resolve_values(
        spec, spec.credential_id, credentials, service=service
    )
    return result.to_dict()
