from storefront.infrastructure.scheduling.report_scheduler import (
    ProductReportScheduler,
)

__all__ = ["ProductReportScheduler"]
