from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

from blueprint.router import route_create, route_draft, route_types, route_update
from blueprint.utils.exceptions import EmptyAdditionsError, ValidationError

app = FastAPI(
    title="Blueprint Schema Migrations",
    version="1.0.0"
)


@app.get("/health", response_class=PlainTextResponse)
def health():
    return "Healthy"


@app.get("/types")
def types():
    return route_types()


@app.post("/drafts")
def create_draft(payload: dict):
    return route_draft(payload)


@app.post("/migrations/create")
def create_migration(payload: dict, request: Request):
    try:
        return route_create(payload, request)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "status": "ERROR",
                "inbound_name": e.inbound_name,
                "message": str(e),
            }
        )


@app.post("/migrations/update")
def update_migration(payload: dict, request: Request):
    try:
        return route_update(payload, request)
    except EmptyAdditionsError as e:
        # Caller misuse, not bad column data
        raise HTTPException(
            status_code=409,
            detail={"status": "ERROR", "message": str(e)}
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "status": "ERROR",
                "inbound_name": e.inbound_name,
                "message": str(e),
            }
        )
