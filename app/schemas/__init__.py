"""Pydantic schemas package.

Folder intent:
  common.py        CamelModel base + HealthResponse (all schemas inherit CamelModel)
  application.py   Credit application + trade reference DTOs
  signature.py     Digital signature request/response
  shipping.py      International shipping request/response
  vendor_form.py   Upload result
  credit.py        Verification signals, score result, analysis and approval DTOs
"""
