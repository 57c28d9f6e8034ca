"""Campus access package.

Feature modules (identities, attendance, sessions, dashboard) each carry a
model, a repository interface with memory and MySQL implementations, a
service and a thin Flask controller.
"""
