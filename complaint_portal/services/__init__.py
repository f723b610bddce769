"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
The lifecycle rules and the access policy are pure modules; the service
classes orchestrate them with repositories and commit nothing themselves.
"""
