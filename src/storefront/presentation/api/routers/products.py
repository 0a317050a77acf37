"""Product router: catalog CRUD, filtering and product emails.

Every route here sits behind the auth gate (attached when the router is
mounted). Products have no owner; any authenticated user may change any
product.
"""

import json
import logging
from typing import Annotated, Any, Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, Request, UploadFile, status
from starlette.datastructures import UploadFile as StarletteUploadFile

from storefront.application.ports import ImageUpload
from storefront.domain.product import InvalidProductError, ProductFilter
from storefront.domain.shared import DomainException, InternalError, ValidationError
from storefront.presentation.api.dependencies import (
    CurrentUser,
    DBSession,
    NotificationService,
    ProductServiceDep,
)
from storefront.presentation.api.schemas.common import MessageResponse
from storefront.presentation.api.schemas.products import (
    ProductListItemResponse,
    ProductMutationResponse,
    ProductResponse,
    SendAllProductsEmailRequest,
    SendProductEmailRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_uploads(files: list[StarletteUploadFile]) -> list[ImageUpload]:
    uploads = []
    for file in files:
        content = await file.read()
        uploads.append(
            ImageUpload(
                filename=file.filename,
                content_type=file.content_type,
                content=content,
            ),
        )
    return uploads


def _as_reference_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return [v for v in value if v]
    msg = "images must be a list of image references"
    raise ValidationError(msg)


async def _parse_update_body(
    request: Request,
) -> tuple[dict[str, Any], list[str], list[ImageUpload]]:
    """Split an update request into scalar fields, kept images and uploads.

    Accepts multipart (``images`` parts are either files or existing
    references) or a JSON object.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        async with request.form() as form:
            fields = {
                name: form.get(name)
                for name in ("productname", "description", "price", "stock")
                if isinstance(form.get(name), str)
            }
            parts = form.getlist("images")
            existing = [p for p in parts if isinstance(p, str) and p]
            files = [p for p in parts if isinstance(p, StarletteUploadFile)]
            uploads = await _read_uploads(files)
        return fields, existing, uploads

    raw = await request.body()
    if not raw:
        return {}, [], []
    try:
        body = json.loads(raw)
    except ValueError as e:
        msg = "Invalid request body"
        raise ValidationError(msg) from e
    if not isinstance(body, dict):
        msg = "Invalid request body"
        raise ValidationError(msg)

    fields = {
        name: body[name]
        for name in ("productname", "description", "price", "stock")
        if body.get(name) is not None
    }
    return fields, _as_reference_list(body.get("images")), []


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    responses={
        201: {"description": "Product created"},
        400: {"description": "Missing fields, no images, too many or invalid images"},
        401: {"description": "Missing or invalid token"},
        413: {"description": "Image too large"},
    },
)
async def create_product(  # NOQA: PLR0913
    current_user: CurrentUser,
    product_service: ProductServiceDep,
    session: DBSession,
    productname: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    price: Annotated[Optional[str], Form()] = None,
    stock: Annotated[Optional[str], Form()] = None,
    images: Annotated[Optional[list[UploadFile]], File()] = None,
) -> ProductMutationResponse:
    """
    Create a product from a multipart form with 1 to 5 images.

    Images must be JPEG, PNG or GIF and at most 5 MB each.
    """
    uploads = await _read_uploads(images or [])
    try:
        product = await product_service.create_product(
            productname=productname,
            description=description,
            price=price,
            stock=stock,
            uploads=uploads,
        )
        await session.commit()
    except DomainException:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        raise InternalError(cause=e) from e

    logger.info("Product %s created by %s", product.id, current_user.user_id)
    return ProductMutationResponse(
        message="Product created",
        product=ProductResponse.from_domain(product),
    )


@router.get(
    "",
    summary="List products",
)
async def list_products(
    product_service: ProductServiceDep,
) -> list[ProductListItemResponse]:
    """Return every product with the public URLs of its images."""
    try:
        products = await product_service.list_products()
    except DomainException:
        raise
    except Exception as e:
        raise InternalError(cause=e) from e

    return [
        ProductListItemResponse(
            **ProductResponse.from_domain(p).model_dump(),
            image_urls=product_service.image_urls(p),
        )
        for p in products
    ]


@router.put(
    "/update/{product_id}",
    summary="Update a product",
    openapi_extra={
        "requestBody": {
            "content": {
                "multipart/form-data": {"schema": {"type": "object"}},
                "application/json": {"schema": {"type": "object"}},
            },
        },
    },
    responses={
        200: {"description": "Product updated"},
        400: {"description": "No images would remain, or invalid input"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "Product not found"},
    },
)
async def update_product(
    product_id: UUID,
    request: Request,
    current_user: CurrentUser,
    product_service: ProductServiceDep,
    session: DBSession,
) -> ProductMutationResponse:
    """
    Update a product.

    The stored image list becomes the existing references sent in
    ``images`` followed by any newly uploaded files. Scalar fields that are
    not sent keep their current value.
    """
    fields, existing_images, uploads = await _parse_update_body(request)
    try:
        product = await product_service.update_product(
            product_id=product_id,
            existing_images=existing_images,
            uploads=uploads,
            **fields,
        )
        await session.commit()
    except DomainException:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        raise InternalError(cause=e) from e

    logger.info("Product %s updated by %s", product.id, current_user.user_id)
    return ProductMutationResponse(
        message="Product updated",
        product=ProductResponse.from_domain(product),
    )


@router.delete(
    "/delete/{product_id}",
    summary="Delete a product",
    responses={
        200: {"description": "Product deleted"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "Product not found"},
    },
)
async def delete_product(
    product_id: UUID,
    current_user: CurrentUser,
    product_service: ProductServiceDep,
    session: DBSession,
) -> MessageResponse:
    """Delete a product. Its image files stay on disk."""
    try:
        await product_service.delete_product(product_id)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        raise InternalError(cause=e) from e

    logger.info("Product %s deleted by %s", product_id, current_user.user_id)
    return MessageResponse(message="Product deleted")


@router.get(
    "/filter",
    summary="Filter products",
    responses={
        200: {"description": "Matching products"},
        400: {"description": "Invalid date or stock value"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "No products found matching the criteria"},
    },
)
async def filter_products(
    product_service: ProductServiceDep,
    productname: Annotated[Optional[str], Query()] = None,
    created_date: Annotated[Optional[str], Query(alias="createdDate")] = None,
    stock: Annotated[Optional[str], Query()] = None,
) -> list[ProductResponse]:
    """
    Filter products.

    - **productname**: case-insensitive substring
    - **createdDate**: ISO-8601 date; products created on or after it
    - **stock**: exact stock level
    """
    criteria = ProductFilter.from_query(
        productname=productname,
        created_date=created_date,
        stock=stock,
    )
    try:
        products = await product_service.filter_products(criteria)
    except DomainException:
        raise
    except Exception as e:
        raise InternalError(cause=e) from e

    return [ProductResponse.from_domain(p) for p in products]


@router.post(
    "/send-email",
    summary="Email one product's details",
    responses={
        200: {"description": "Email sent successfully"},
        400: {"description": "Product data is missing or incomplete"},
        401: {"description": "Missing or invalid token"},
        500: {"description": "Error sending email"},
    },
)
async def send_product_email(
    request: SendProductEmailRequest,
    notification_service: NotificationService,
) -> MessageResponse:
    """Send a product's details, optionally with PDF/TXT attachments."""
    if request.product is None or not request.product.productname:
        msg = "Product data is missing"
        raise InvalidProductError(msg)

    try:
        await notification_service.send_product_email(
            to=request.to,
            subject=request.subject,
            product=request.product.to_details(),
            attachment_paths=request.attachment_file_paths,
        )
    except DomainException:
        raise
    except Exception as e:
        raise InternalError(cause=e) from e

    return MessageResponse(message="Email sent successfully")


@router.post(
    "/send-emails-to-all",
    summary="Email every product's details",
    responses={
        200: {"description": "Email sent successfully with all products"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "No products found in the database"},
        500: {"description": "Error sending email"},
    },
)
async def send_all_products_email(
    request: SendAllProductsEmailRequest,
    notification_service: NotificationService,
) -> MessageResponse:
    try:
        await notification_service.send_all_products_report(to=request.to)
    except DomainException:
        raise
    except Exception as e:
        raise InternalError(cause=e) from e

    return MessageResponse(message="Email sent successfully with all products")
