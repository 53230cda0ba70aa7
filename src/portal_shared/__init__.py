"""Shared domain layer for the hotel booking portal.

Contains the pydantic data models, the DynamoDB wrapper and the services
that implement hotel administration, booking links, guest completion and
dashboard aggregation. Has no dependency on the web framework.
"""
