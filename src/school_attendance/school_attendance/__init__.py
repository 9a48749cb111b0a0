"""School attendance package.

Feature modules (users, classes, enrollments, attendance, reports) each carry a
domain model, a repository interface with a MySQL implementation, a service
layer and a thin Flask JSON controller.
"""
