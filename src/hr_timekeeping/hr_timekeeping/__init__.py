"""HR Timekeeping package.

Feature modules (attendance, work_plans, leaves, dashboard, ...) each keep a
thin Flask controller over service and repository layers. Services depend on
repository Protocols; the MySQL implementations are wired in ``container``.
"""
