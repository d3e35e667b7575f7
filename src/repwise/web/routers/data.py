"""Export and import routes."""

from fastapi import APIRouter, HTTPException, Request

from ..deps import get_engine

router = APIRouter(prefix="/api", tags=["data"])


@router.post("/export")
async def export_state(request: Request):
    """Write an export snapshot to the exports directory."""
    path = await get_engine(request).create_export_file()
    if path is None:
        raise HTTPException(status_code=500, detail="Export failed")
    return {"path": str(path)}


@router.post("/import")
async def import_state(request: Request):
    """Replace all state with an exported document sent as the request body."""
    engine = get_engine(request)
    body = await request.body()
    try:
        source = body.decode("utf-8")
    except UnicodeDecodeError:
        source = ""
    if not await engine.import_from_json(source):
        raise HTTPException(status_code=400, detail="Not a valid repwise export")
    return {
        "muscleGroups": len(engine.muscle_groups),
        "completedSessions": len(engine.completed_sessions),
    }


@router.get("/exports")
async def list_exports(request: Request):
    """Exports written so far, newest first."""
    return await get_engine(request).gateway.list_exports()
