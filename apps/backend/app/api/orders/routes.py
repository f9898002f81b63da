"""Order desk routes: product list and order submission."""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from packages.core.orders import OrderFormError, OrderSubmissionError, parse_order_form
from packages.db.executor import QueryError
from packages.db.pool import DatabaseConnectionError

from app.core.dependencies import OrderEntryServiceDep

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse)
@router.api_route(
    "/index.html",
    methods=["GET", "HEAD"],
    response_class=HTMLResponse,
    include_in_schema=False,
)
async def product_list(request: Request, service: OrderEntryServiceDep):
    """Render the order form with every product in the catalog."""
    try:
        products = await service.list_products()
    except DatabaseConnectionError as e:
        return _catalog_unavailable(request, str(e))
    except QueryError as e:
        return _catalog_unavailable(request, e.message)

    return templates.TemplateResponse(
        request,
        "index.html",
        {"products": products, "error": ""},
    )


@router.post("/order", response_class=HTMLResponse)
async def submit_order(request: Request, service: OrderEntryServiceDep):
    """
    Record an order submitted from the order form.

    The result page is always rendered with 200; ``has_error`` and ``error``
    tell the user whether the order was saved.
    """
    form = await request.form()
    cust_id = form.get("custId", "")
    order_id = None
    error = ""

    try:
        order_request = parse_order_form(form)
        order_id = await service.submit_order(order_request)
    except OrderFormError as e:
        logger.warning("Rejected order form for customer %r: %s", cust_id, e)
        error = str(e)
    except OrderSubmissionError as e:
        error = e.message
    except DatabaseConnectionError as e:
        logger.error("Order for customer %r not submitted: %s", cust_id, e)
        error = str(e)

    return templates.TemplateResponse(
        request,
        "result.html",
        {
            "has_error": bool(error),
            "error": error,
            "cust_id": cust_id,
            "order_id": order_id,
        },
    )


def _catalog_unavailable(request: Request, message: str):
    return templates.TemplateResponse(
        request,
        "index.html",
        {"products": [], "error": message},
    )
