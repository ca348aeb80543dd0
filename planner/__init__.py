"""
Planner Application.

- backend/: REST API, persistence, services, configuration
- client/: Authenticated HTTP client and screen controllers for the mobile app
"""
