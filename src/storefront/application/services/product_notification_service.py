"""Product notification service: renders product emails and dispatches them."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from storefront.application.ports.mail import MailAttachment, MailMessage
from storefront.domain.product import InvalidProductError, NoProductsFoundError
from storefront.domain.shared import SendFailureError

if TYPE_CHECKING:
    from storefront.application.ports.mail import MailTransport
    from storefront.domain.product import Product, ProductRepository

logger = logging.getLogger(__name__)

ALL_PRODUCTS_SUBJECT = "Product Details for All Products"
ALL_PRODUCTS_HEADING = "All Product Details"
SCHEDULED_REPORT_HEADING = "Daily Product Report"
ATTACHMENT_EXTENSIONS = (".pdf", ".txt")

PRODUCT_TABLE_HTML = """
<table border="1" style="border-collapse: collapse; width: 100%; text-align: left;">
  <thead>
    <tr>
      <th style="padding: 8px; background-color: #f2f2f2;">Field</th>
      <th style="padding: 8px; background-color: #f2f2f2;">Value</th>
    </tr>
  </thead>
  <tbody>
    <tr><td style="padding: 8px;">Product Name</td><td style="padding: 8px;">{productname}</td></tr>
    <tr><td style="padding: 8px;">Description</td><td style="padding: 8px;">{description}</td></tr>
    <tr><td style="padding: 8px;">Price</td><td style="padding: 8px;">{price}</td></tr>
    <tr><td style="padding: 8px;">Stock</td><td style="padding: 8px;">{stock}</td></tr>
    <tr><td style="padding: 8px;">Images</td><td style="padding: 8px;">{images}</td></tr>
  </tbody>
</table>
"""  # NOQA: E501

IMAGE_HTML = '<img src="{src}" alt="Product Image" width="100" style="margin-right: 5px;" />'  # NOQA: E501

REPORT_ENTRY_HTML = """
<h3>Product: {productname}</h3>
{table}
<hr style="border-top: 1px solid #ddd;" />
"""


@dataclass(frozen=True)
class ProductDetails:
    """
    The product fields an email shows.

    Built either from a stored Product or from a client-supplied payload,
    which is not required to match any stored record.
    """

    productname: Optional[str]
    price: Any
    description: Optional[str] = None
    stock: Any = None
    images: list[str] = field(default_factory=list)

    @classmethod
    def from_product(cls, product: Product) -> ProductDetails:
        return cls(
            productname=product.productname,
            price=product.price,
            description=product.description,
            stock=product.stock,
            images=product.images,
        )


def _format_price(price: Any) -> str:
    try:
        return f"${float(price):.2f}"
    except (TypeError, ValueError):
        return escape(str(price))


def render_product_table(product: ProductDetails) -> str:
    """Render one product as an HTML field/value table.

    Falsy description and stock render as "N/A", so a stock of 0 shows
    "N/A" as well.
    """
    if product.images:
        images = "".join(IMAGE_HTML.format(src=escape(str(img))) for img in product.images)
    else:
        images = "No images available"

    return PRODUCT_TABLE_HTML.format(
        productname=escape(str(product.productname)),
        description=escape(str(product.description)) if product.description else "N/A",
        price=_format_price(product.price),
        stock=escape(str(product.stock)) if product.stock else "N/A",
        images=images,
    )


def render_product_email(product: ProductDetails) -> str:
    return f"<h2>Product Details</h2>{render_product_table(product)}"


def render_product_report(heading: str, products: list[ProductDetails]) -> str:
    entries = "".join(
        REPORT_ENTRY_HTML.format(
            productname=escape(str(product.productname)),
            table=render_product_table(product),
        )
        for product in products
    )
    return f"<h2>{escape(heading)}</h2>{entries}"


def _read_attachment(path: Path) -> MailAttachment:
    return MailAttachment(filename=path.name, content=path.read_bytes())


class ProductNotificationService:
    """
    Application service for product emails.

    Renders product HTML and dispatches it through a MailTransport. Used
    synchronously by the email endpoints and periodically by the report
    scheduler.
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        mail_transport: MailTransport,
        report_recipient: str,
        report_subject: str,
    ):
        self._product_repo = product_repository
        self._transport = mail_transport
        self._report_recipient = report_recipient
        self._report_subject = report_subject

    async def send_product_email(
        self,
        to: str,
        subject: str,
        product: ProductDetails,
        attachment_paths: Optional[list[str]] = None,
    ) -> None:
        """
        Send one product's details, with optional file attachments.

        Parameters
        ----------
        to
            Recipient address
        subject
            Mail subject
        product
            Product to render; needs a name and a non-zero price
        attachment_paths
            Server-side file paths. Only files that exist and end in
            .pdf or .txt are attached; the rest are skipped.

        Raises
        ------
        InvalidProductError
            If the product has no name or no price
        SendFailureError
            If the transport fails
        """
        if not product.productname or not product.price:
            raise InvalidProductError

        attachments = await self._load_attachments(attachment_paths or [])
        message = MailMessage(
            to=to,
            subject=subject,
            html_body=render_product_email(product),
            attachments=tuple(attachments),
        )
        await self._dispatch(message)

    async def send_all_products_report(self, to: str) -> None:
        """
        Send every catalog product to ``to``.

        Raises
        ------
        NoProductsFoundError
            If the catalog is empty
        SendFailureError
            If the transport fails
        """
        products = await self._product_repo.find_all()
        if not products:
            raise NoProductsFoundError("No products found in the database")

        message = MailMessage(
            to=to,
            subject=ALL_PRODUCTS_SUBJECT,
            html_body=render_product_report(
                ALL_PRODUCTS_HEADING,
                [ProductDetails.from_product(p) for p in products],
            ),
        )
        await self._dispatch(message)

    async def send_scheduled_report(self, to: Optional[str] = None) -> bool:
        """
        Send the periodic catalog report.

        Returns
        -------
        True if a report was sent, False if the catalog was empty
        """
        products = await self._product_repo.find_all()
        if not products:
            logger.info("No products found in the database, skipping report")
            return False

        message = MailMessage(
            to=to or self._report_recipient,
            subject=self._report_subject,
            html_body=render_product_report(
                SCHEDULED_REPORT_HEADING,
                [ProductDetails.from_product(p) for p in products],
            ),
        )
        await self._dispatch(message)
        logger.info("Product report sent (%d products)", len(products))
        return True

    async def _load_attachments(self, paths: list[str]) -> list[MailAttachment]:
        attachments = []
        for raw_path in paths:
            path = Path(raw_path)
            if not path.is_file():
                logger.warning("Attachment not found, skipping: %s", raw_path)
                continue
            if path.suffix.lower() not in ATTACHMENT_EXTENSIONS:
                logger.warning("Skipping non-PDF attachment: %s", raw_path)
                continue
            attachments.append(await asyncio.to_thread(_read_attachment, path))
        return attachments

    async def _dispatch(self, message: MailMessage) -> None:
        try:
            await self._transport.send(message)
        except Exception as e:
            logger.error("Failed to send email to %s: %s", message.to, e)
            raise SendFailureError from e
        logger.info("Email sent to %s", message.to)
