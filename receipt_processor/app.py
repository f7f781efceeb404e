import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from receipt_processor.config import LOG_FORMAT, load_settings
from receipt_processor.model.PayloadModel import (
    ErrorResponse,
    PointsResponse,
    ProcessResponse,
    ReceiptPayload,
)
from receipt_processor.points.scorer import score_receipt
from receipt_processor.store.memory import ReceiptStore

logger = logging.getLogger(__name__)

INVALID_RECEIPT = "The receipt is invalid."
RECEIPT_NOT_FOUND = "No receipt found for that ID."


def get_store(request: Request) -> ReceiptStore:
    return request.app.state.store


async def handle_invalid_receipt(request: Request, exc: RequestValidationError):
    logger.warning("Rejected receipt on %s: %d validation error(s)", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=400, content={"detail": INVALID_RECEIPT})


def create_app(store: Optional[ReceiptStore] = None) -> FastAPI:
    """Build the service around a single store, fresh unless one is given."""
    app = FastAPI(title="Receipt Processor")
    app.state.store = store if store is not None else ReceiptStore()
    app.add_exception_handler(RequestValidationError, handle_invalid_receipt)

    @app.post(
        "/receipts/process",
        response_model=ProcessResponse,
        responses={400: {"model": ErrorResponse}},
    )
    async def process_receipt(payload: ReceiptPayload, store: ReceiptStore = Depends(get_store)):
        points = score_receipt(payload.to_receipt())
        receipt_id = store.put(points)
        logger.info("Processed receipt %s: %d points", receipt_id, points)
        return ProcessResponse(id=receipt_id)

    @app.get(
        "/receipts/{receipt_id}/points",
        response_model=PointsResponse,
        responses={404: {"model": ErrorResponse}},
    )
    async def get_points(receipt_id: str, store: ReceiptStore = Depends(get_store)):
        record = store.get(receipt_id)
        if record is None:
            logger.info("No receipt found for id %s", receipt_id)
            raise HTTPException(status_code=404, detail=RECEIPT_NOT_FOUND)
        return PointsResponse(points=record.points)

    return app


app = create_app()


def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    import uvicorn

    logger.info("Server is running on port %d...", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
