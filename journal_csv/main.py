import logging

from fastapi import FastAPI, UploadFile, File, HTTPException

from .config import settings
from .errors import CSVImportError
from .export import CSVExportService, export_csv_envelope
from .importer import CSVImportService
from .models import ExportRequest, ExportResponse, HealthResponse, ImportErrorDetail, ImportResponse

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="journal-csv",
    description="CSV export and import for session journal entries",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/export", response_model=ExportResponse)
def export_entries(request: ExportRequest):
    service = CSVExportService(tz=settings.tz, filename=settings.export_filename)
    date_range = request.date_range.as_tuple() if request.date_range else None
    return export_csv_envelope(service, request.entries, date_range, request.treatment_type)

@app.post("/import", response_model=ImportResponse)
async def import_entries(file: UploadFile = File(...)):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File is too large to import")

    try:
        entries = CSVImportService(tz=settings.tz).decode(raw)
    except CSVImportError as e:
        logger.warning(f"Rejected import of {file.filename}: {e}")
        raise HTTPException(
            status_code=422,
            detail=ImportErrorDetail(error=e.kind, row=e.row, message=str(e)).model_dump(),
        )

    return {"entries": entries, "summary": {"rows": len(entries)}}
