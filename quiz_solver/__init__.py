"""Quiz solver: find the PDF a quiz page hides, sum its table, submit the answer."""

__version__ = "0.1.0"
