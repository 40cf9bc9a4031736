"""App Creator -- scaffold applications from layered templates.

A project is composed from a base layer, a target layer (web resource,
portal, Power Pages, mobile) and an optional UI library layer, followed by
``{{TOKEN}}`` substitution across the result.
"""

__version__ = "0.1.0"
