"""Core application for the SIMRS backend.

Models for patients, clinicians, terminologies and encounter records,
plus the serializers, services, views and routes of the REST API.
"""
