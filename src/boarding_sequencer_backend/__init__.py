"""
Boarding Sequencer Backend - REST API for computing aircraft boarding order

This package provides a FastAPI-based web service that accepts a plain-text
booking file and returns the order in which bookings should be called to
board. It enables:

- Booking file uploads (multipart field ``file``)
- Tolerant line parsing that skips headers and malformed lines
- Back-to-front, window-before-aisle ordering with deterministic tie-breaks
- Configurable priority tables for closed seat sets

Key Components:
    - main: FastAPI application and HTTP endpoint definitions
    - sequence_service: Request-level coordinator used by the endpoints
    - parser: Booking line parsing
    - seats: Seat label resolution and window/aisle classification
    - sequencer: Strategy selection and ordering
    - configuration: Config loading and merging logic
    - models: Pydantic models for responses

Usage:
    Run the API server with:
        uvicorn boarding_sequencer_backend.main:app --reload --host 0.0.0.0 --port 3000

    Or use the console script, which reads host and port from configuration:
        boarding-sequencer
"""
