from fastapi import APIRouter
from starlette.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST, Counter

router = APIRouter(tags=["system"])

# incremented by the student service and the error handlers
STUDENT_OPERATIONS = Counter(
    "student_operations_total", "Successful student mutations", ["operation"]
)
API_ERRORS = Counter("api_errors_total", "Error responses sent", ["status"])


@router.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
