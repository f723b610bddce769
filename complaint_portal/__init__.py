"""민원 관리 포털 — Complaint tracking portal backend."""
