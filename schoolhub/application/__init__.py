# Application layer: services that orchestrate domain and infrastructure.

from schoolhub.application.container import ServiceContainer, build_container
from schoolhub.application.course_service import CourseService
from schoolhub.application.enrollment_service import EnrollmentService
from schoolhub.application.order_service import OrderService
from schoolhub.application.school_service import SchoolService, SchoolStats
from schoolhub.application.storefront_service import CoursePage, PreviewModule, PublicCourse, StorefrontService
from schoolhub.application.tenant_directory import TenantDirectory
from schoolhub.application.webhook_service import WebhookService

__all__ = [
    "CoursePage",
    "CourseService",
    "EnrollmentService",
    "OrderService",
    "PreviewModule",
    "PublicCourse",
    "SchoolService",
    "SchoolStats",
    "ServiceContainer",
    "StorefrontService",
    "TenantDirectory",
    "WebhookService",
    "build_container",
]
