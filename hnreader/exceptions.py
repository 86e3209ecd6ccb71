"""
Custom exceptions
"""


class ValidationError(ValueError):
    """Invalid caller input (bad id, page, limit or category)"""

    def __init__(self, detail: str = "Validation error"):
        self.detail = detail
        super().__init__(detail)
