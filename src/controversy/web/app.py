"""FastAPI upload server for card-sheet exports.

Serves a minimal upload form; each uploaded CSV is run through the set
importer and summarized in the response (optionally persisted to the
set store).

Usage:
    python -m controversy.web.app
    # => Uvicorn running on http://127.0.0.1:12001
"""

import asyncio
import io
import logging
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse

from controversy import config
from controversy.ingest.pipeline import parse_rows
from controversy.ingest.reader import RowReadError, iter_rows
from controversy.ingest.schema import CardSet
from controversy.storage import SetStore

logger = logging.getLogger(__name__)

# Path to static frontend assets
STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Controversy set importer")


def get_store() -> SetStore:
    """Return the store uploads are persisted to."""
    return SetStore(config.sets_dir())


def _summarize(card_set: CardSet) -> dict:
    """Build the per-set summary returned to the uploader."""
    return {
        "id": str(card_set.id),
        "name": card_set.name,
        "card_count": len(card_set.cards),
        "prompt_count": len(card_set.prompts),
        "response_count": len(card_set.responses),
        "sample": [card.text for card in card_set.cards[: config.UPLOAD_SAMPLE_SIZE]],
    }


def _parse_upload(filename: str, content: bytes) -> list[CardSet]:
    """Run the importer over one uploaded file's bytes."""
    stream = io.TextIOWrapper(io.BytesIO(content), encoding="utf-8-sig", errors="surrogateescape", newline="")
    try:
        return parse_rows(iter_rows(stream, skip_header_row=config.SKIP_HEADER_ROW, strict=config.STRICT_ROWS))
    except RowReadError as exc:
        logger.warning("Rejected upload %s: %s", filename, exc)
        raise HTTPException(status_code=400, detail=f"{filename}: {exc}") from exc


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the upload form."""
    return HTMLResponse(STATIC_DIR.joinpath("index.html").read_text(encoding="utf-8"))


@app.post("/")
async def upload_csv(file: list[UploadFile] = File(...)):
    """Parse each uploaded CSV into card sets and report what was found."""
    results: list[dict] = []
    for upload in file:
        filename = upload.filename or "upload.csv"
        content = await upload.read()
        logger.info("Received upload %s (%.1f KB)", filename, len(content) / 1024)

        card_sets = await asyncio.to_thread(_parse_upload, filename, content)
        logger.info("Found %d sets in %s", len(card_sets), filename)

        if config.PERSIST_UPLOADS:
            get_store().add_sets(card_sets)

        results.append({"filename": filename, "sets": [_summarize(s) for s in card_sets]})

    return JSONResponse({"files": results})


@app.get("/api/sets")
async def list_sets():
    """List the sets persisted so far."""
    return JSONResponse({"sets": get_store().list_sets()})


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the upload server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
