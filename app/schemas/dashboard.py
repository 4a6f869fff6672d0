from pydantic import BaseModel
from app.schemas.case import Case, UrgentHearing

class DashboardMetrics(BaseModel):
    active_litigation: int = 0
    advisory_backlog: int = 0
    urgent_hearings: int = 0
    win_rate: float = 0
    total_cases: int = 0
    pending_advisory: int = 0
    urgent_advisory: int = 0

class DashboardResponse(BaseModel):
    metrics: DashboardMetrics
    upcoming_hearings: list[Case]
    urgent_hearings: list[UrgentHearing]
