import logging
import uuid
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import TypeAdapter, ValidationError

from receipt_processor.model.ReceiptModel import Receipt
from receipt_processor.points.rules import calculate_points
from receipt_processor.store.memory import MemoryReceiptStore, ReceiptStore

log = logging.getLogger(__name__)

HOST = "0.0.0.0"
PORT = 8000

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# A JSON null body decodes to an empty receipt
receipt_adapter = TypeAdapter(Optional[Receipt])


def parse_receipt(body: bytes) -> Receipt:
    # Content-Type is ignored; the body is always read as JSON
    try:
        receipt = receipt_adapter.validate_json(body)
    except ValidationError as e:
        log.info("Rejected receipt: %s", e.errors())
        raise HTTPException(status_code=400, detail="Invalid receipt JSON")
    return receipt if receipt is not None else Receipt()


def parse_receipt_id(path: str) -> str:
    # "/receipts/{id}/points" splits into ["", "receipts", "{id}", "points"]
    parts = path.split("/")
    if len(parts) < 3:
        raise HTTPException(status_code=400, detail="Invalid URL format")
    return parts[2]


def get_store(request: Request) -> ReceiptStore:
    return request.app.state.store


async def process_receipt(request: Request, store: ReceiptStore = Depends(get_store)):
    receipt = parse_receipt(await request.body())
    points = calculate_points(receipt)
    receipt_id = str(uuid.uuid4())
    store.put(receipt_id, points)
    log.info("Processed receipt %s for %r: %d points", receipt_id, receipt.retailer, points)
    return {"id": receipt_id}


def receipt_points(request: Request, store: ReceiptStore = Depends(get_store)):
    path = request.url.path
    if request.method != "GET" or not path.endswith("/points"):
        raise HTTPException(status_code=404, detail="Not found")

    receipt_id = parse_receipt_id(path)
    points = store.get(receipt_id)
    if points is None:
        log.info("Lookup for unknown receipt %s", receipt_id)
        raise HTTPException(status_code=404, detail="Receipt ID not found")
    return {"points": points}


def create_app(store: Optional[ReceiptStore] = None) -> FastAPI:
    app = FastAPI(title="Receipt Processor")
    app.state.store = store if store is not None else MemoryReceiptStore()

    app.add_api_route("/receipts/process", process_receipt, methods=["POST"])
    app.add_api_route("/receipts/{path:path}", receipt_points, methods=ALL_METHODS)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    log.info("Server is running on port %d...", PORT)
    uvicorn.run("receipt_processor.app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
