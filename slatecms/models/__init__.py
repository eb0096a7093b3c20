# Importing the package registers every table on Base.metadata
from slatecms.models.auth import ApiKey, User, UserRole, UserSession, Workspace  # noqa: F401
from slatecms.models.content import (  # noqa: F401
    Block, Faq, GlobalSection, Page, Project, ServiceOffering, SiteSetting, Testimonial,
)
from slatecms.models.audit import AuditLogEntry  # noqa: F401
