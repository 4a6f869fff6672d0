from app.schemas.user import (
    UserRole, Profile, User, CurrentUser, UserListResponse,
    CreateUserRequest, UpdateUserRequest, DeleteUserRequest, BootstrapAdminRequest
)
from app.schemas.auth import Token, UserLogin, SessionInfo
from app.schemas.case import Case, CaseCreate, CaseListResponse, ProceduralStage, CaseStatus
from app.schemas.advisory import (
    AdvisoryRequest, AdvisoryCreate, AdvisoryListResponse, AdvisoryBoard,
    AdvisoryStatus, AdvisoryPriority
)
from app.schemas.document import Document, DocumentCreate, DocumentListResponse, DocumentType, DocumentStatus
from app.schemas.audit import AuditLog, AuditLogCreate, AuditLogListResponse, ActionType, DateRange
from app.schemas.dashboard import DashboardMetrics, DashboardResponse

# Export all schemas
__all__ = [
    'UserRole', 'Profile', 'User', 'CurrentUser', 'UserListResponse',
    'CreateUserRequest', 'UpdateUserRequest', 'DeleteUserRequest', 'BootstrapAdminRequest',
    'Token', 'UserLogin', 'SessionInfo',
    'Case', 'CaseCreate', 'CaseListResponse', 'ProceduralStage', 'CaseStatus',
    'AdvisoryRequest', 'AdvisoryCreate', 'AdvisoryListResponse', 'AdvisoryBoard',
    'AdvisoryStatus', 'AdvisoryPriority',
    'Document', 'DocumentCreate', 'DocumentListResponse', 'DocumentType', 'DocumentStatus',
    'AuditLog', 'AuditLogCreate', 'AuditLogListResponse', 'ActionType', 'DateRange',
    'DashboardMetrics', 'DashboardResponse',
]
