from __future__ import annotations

from fastapi import APIRouter, Depends

from digital_menu.core.metrics import request_metrics
from digital_menu.deps import require_admin
from digital_menu.models.admin_user import AdminUser

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("")
def endpoint_metrics(_admin: AdminUser = Depends(require_admin)):
    return {"endpoints": request_metrics.snapshot()}
