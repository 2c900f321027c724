from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.core.errors import StoreError
from app.core.wiring import Services

router = APIRouter()


def get_services(request: Request) -> Services:
    return request.app.state.services


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/events")
async def create_event(request: Request, services: Services = Depends(get_services)):
    """
    Store the request body as an ingest record.

    Expects a JSON object with `principalId` and `content`. Returns 201 with the
    stored record, 400 on malformed or incomplete input, 500 if the write fails.
    """
    event = {"body": await request.body()}
    result = await run_in_threadpool(services.ingest_pipeline().run, event)
    return JSONResponse(status_code=result.status_code, content=result.payload)


@router.get("/events/{record_id}")
def read_event(record_id: str, services: Services = Depends(get_services)):
    return _read(services.event_store, record_id, "Event")


@router.post("/forecast/refresh")
async def refresh_forecast(request: Request, services: Services = Depends(get_services)):
    """
    Fetch the current forecast and store a snapshot. The request body is ignored
    apart from being logged.
    """
    event = {"body": (await request.body()).decode("utf-8", errors="replace"), "path": request.url.path}
    result = await run_in_threadpool(services.forecast_pipeline().run, event)
    return JSONResponse(status_code=result.status_code, content=result.payload)


@router.get("/forecasts/{record_id}")
def read_forecast(record_id: str, services: Services = Depends(get_services)):
    return _read(services.weather_store, record_id, "Forecast")


def _read(store, record_id: str, label: str):
    try:
        item = store.get(record_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to read {label.lower()}: {e}")
    if item is None:
        raise HTTPException(status_code=404, detail=f"{label} {record_id} not found")
    return item
