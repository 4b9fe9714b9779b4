"""
Yardbook Job Tracker Application
Calendar, job lists and invoices for a landscaping business

MODULAR ARCHITECTURE:
This application uses a modular structure with Flask Blueprints.

Web layer (in app/ package):
- app/api/pages.py: Dashboard, management and overview screens
- app/api/jobs.py: JSON API over the jobs collection (/api/jobs/*)
- app/api/calendar.py: Month grid and blocked days (/api/calendar/*)
- app/utils/: Shared utilities (Google Maps links)

Services (in services/ directory):
- services/job_store.py: Jobs collection (database or JSON fallback)
- services/job_dates.py: Date normalization and day matching
- services/calendar_service.py: Month grid and blocked days
- services/job_views.py: Display formatting and screen view models
- services/job_actions.py: Mark-completed write-back
- services/invoice_pdf.py: Invoice PDFs

Data Layer:
- database/models.py: SQLAlchemy document table
- database/seed.py: Sample jobs for development
"""
import os
import logging

from app_init import create_app

# Initialize Flask app with new infrastructure
app = create_app()
logger = logging.getLogger(__name__)


if __name__ == '__main__':
    # Database tables are created on startup or via Alembic migrations
    # Run: alembic upgrade head
    if app.config.get('STORAGE_MODE') == 'database':
        print("✅ Using PostgreSQL database (run 'alembic upgrade head' for migrations)")
    else:
        print("📁 Using JSON file storage")

    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
