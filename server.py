import time

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel
import uvicorn

from tabledoc.documentation.pipeline import DocumentationPipeline, create_pipeline_from_env
from tabledoc.exceptions import CatalogUnavailable, TableDocError, TableNotFound

load_dotenv()

app = FastAPI(title="Table Documentation Server", version="0.1.0")

# Shared pipeline; every request opens its own catalog session
_pipeline_instance = None


def get_pipeline() -> DocumentationPipeline:
    global _pipeline_instance
    if _pipeline_instance is None:
        _pipeline_instance = create_pipeline_from_env()
    return _pipeline_instance


# Request Models
class DocumentRequest(BaseModel):
    table: str
    export: bool = False


# Response Models
class ExportResponse(BaseModel):
    table: str
    path: str
    columns: int
    dependencies: int
    html: str


def error_status(error: TableDocError) -> int:
    if isinstance(error, TableNotFound):
        return 404
    if isinstance(error, CatalogUnavailable):
        return 503
    return 500


@app.get("/status")
def status():
    """Get system status"""
    try:
        pipeline = get_pipeline()
        return {
            "status": "running",
            "database_type": pipeline.connector.db_type,
            "timestamp": time.time()
        }
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/document")
def document(req: DocumentRequest):
    """Render a table's documentation; with export=true also write it and report the path"""
    try:
        pipeline = get_pipeline()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    try:
        result = pipeline.document(req.table, export=req.export)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TableDocError as e:
        raise HTTPException(status_code=error_status(e), detail=str(e))

    if req.export:
        return JSONResponse(ExportResponse(
            table=result.identity.qualified_name,
            path=result.path,
            columns=len(result.model.columns),
            dependencies=len(result.model.dependencies),
            html=result.html
        ).model_dump())

    return HTMLResponse(result.html)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
