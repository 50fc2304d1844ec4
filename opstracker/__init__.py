"""
Operations Tracker Application Package

This package contains the backend for the small-business operations tracker:
- api: FastAPI application and routes
- auth: Clerk session token verification
- billing: Plans, free-tier limits and subscription events
- db: Supabase database client and table metadata
- services: Daily log, pipeline, financials, scripts and dashboard logic
- webhooks: Signed identity and billing webhooks
- workflows / worker: Cascading user-data deletion on Celery
- tests: Test suites
"""
