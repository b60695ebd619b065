"""Routers package: HTTP endpoint definitions (all under /api/*).

Files:
  applications.py  /api/applications
  signatures.py    /api/signatures
  shipping.py      /api/shipping
  upload.py        /api/upload (multipart)
  credit.py        /api/credit-analysis, /api/credit-approval

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
