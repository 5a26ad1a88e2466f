"""Infrastructure layer — file reads, atomic writes, subprocess execution.

Raises the :mod:`licensectl.domain.errors` taxonomy; the service layer
converts those into ServiceResult failures.
"""
