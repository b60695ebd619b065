"""Services package: all business logic lives here, never in routers.

Files:
  verification.py     Mock domain/business/phone/address checks (pure functions)
  scoring.py          Additive credit score rubric
  credit_analysis.py  Verification + scoring + decision tiers + narrative
  openai_service.py   OpenAI narrative writer (optional)
  credit_approval.py  Approve/deny decisions from signed links
  application.py      Credit application intake
  signature.py        Digital signatures (one per application)
  shipping.py         International shipping requests
  upload.py           Vendor form uploads
  storage.py          S3 presigned-PUT object storage

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
