from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gst_billing.api.routes import health_router
from gst_billing.api.v1 import v1_router
from gst_billing.api.v1.envelope import field_error
from gst_billing.config.settings import settings
from gst_billing.core.logging_config import setup_logging
from gst_billing.domain.services.invoice_tax import TaxInputError

setup_logging()

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)


@app.exception_handler(TaxInputError)
async def tax_input_error_handler(request: Request, exc: TaxInputError):
    return JSONResponse(
        status_code=422,
        content=field_error(exc.field, str(exc)),
    )


app.include_router(health_router)
app.include_router(v1_router)
