"""Contract Monthly Claim System package.

This package is organized by feature modules (claims, lecturers, reports, users)
with a thin Flask controller layer and SOLID service/repository layers.
"""
