"""
Tests for Boarding Sequencer Backend API endpoints.

Tests cover:
- Health check
- Configuration defaults
- Sequence computation from uploaded files
- Error mapping (missing file, no valid bookings, unexpected failures)
- CORS
"""

from io import BytesIO

from boarding_sequencer_backend.main import app, get_sequence_service


def upload(client, text, filename="bookings.txt"):
    payload = text.encode("utf-8") if isinstance(text, str) else text
    return client.post(
        "/api/sequence",
        files={"file": (filename, BytesIO(payload), "text/plain")},
    )


class TestHealthCheck:
    """Tests for the /healthz endpoint."""

    def test_health_check_returns_ok(self, client):
        """Health check should return status ok."""
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestConfigDefaults:
    """Tests for the /config/defaults endpoint."""

    def test_get_config_defaults(self, client):
        """Should return configuration metadata."""
        response = client.get("/config/defaults")
        assert response.status_code == 200

        data = response.json()
        assert data["priority_tables"]["four_seat_demo"] == {"A2": 1, "B2": 2, "A1": 3, "B1": 4}
        assert data["window_columns"] == ["A", "D"]
        assert data["aisle_columns"] == ["B", "C"]


class TestSequence:
    """Tests for the /api/sequence endpoint."""

    def test_sample_file(self, client, sample_bookings):
        """Deeper rows board first."""
        response = upload(client, sample_bookings)
        assert response.status_code == 200
        assert response.json() == {
            "sequence": [
                {"seq": 1, "bookingId": 120},
                {"seq": 2, "bookingId": 101},
            ]
        }

    def test_demo_seats(self, client, demo_bookings):
        """Four-seat demo uploads follow the fixed priority table."""
        response = upload(client, demo_bookings)
        assert response.status_code == 200
        assert response.json()["sequence"] == [
            {"seq": 1, "bookingId": 1},
            {"seq": 2, "bookingId": 3},
            {"seq": 3, "bookingId": 2},
        ]

    def test_malformed_lines_are_skipped(self, client):
        """Header and bad-id lines are dropped without failing the request."""
        response = upload(client, "Booking Seats\nXYZ A1\n7 B4\r\n\n")
        assert response.status_code == 200
        assert response.json()["sequence"] == [{"seq": 1, "bookingId": 7}]

    def test_byte_order_mark(self, client):
        """A leading BOM does not break the first line."""
        response = upload(client, b"\xef\xbb\xbf5 C9\n6 A10\n")
        assert response.status_code == 200
        assert [entry["bookingId"] for entry in response.json()["sequence"]] == [6, 5]

    def test_undecodable_bytes(self, client):
        """Invalid UTF-8 only affects the line it appears on."""
        response = upload(client, b"\xff\xfe A1\n3 D2\n")
        assert response.status_code == 200
        assert response.json()["sequence"] == [{"seq": 1, "bookingId": 3}]

    def test_missing_file(self, client):
        """Requests without the file field are rejected."""
        response = client.post("/api/sequence", files={"upload": ("x.txt", BytesIO(b"1 A1"), "text/plain")})
        assert response.status_code == 400
        assert response.json() == {"detail": "No file uploaded. Field name must be 'file'."}

    def test_no_valid_bookings(self, client):
        """A file with only malformed lines is a validation failure, not an empty list."""
        response = upload(client, "Booking Seats\nXYZ A1\n\n")
        assert response.status_code == 400
        assert response.json() == {"detail": "No valid booking lines found."}

    def test_empty_file(self, client):
        response = upload(client, b"")
        assert response.status_code == 400

    def test_unexpected_failure_is_generic(self, client):
        """Internal errors are reported without detail."""

        class BrokenService:
            def sequence_upload(self, raw, source="upload"):
                raise RuntimeError("secret internals")

        app.dependency_overrides[get_sequence_service] = lambda: BrokenService()
        try:
            response = upload(client, "1 A1\n")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"detail": "Server error."}


class TestCORS:
    """Tests for CORS configuration."""

    def test_cors_headers_present(self, client):
        """Simple requests from another origin get an allow-origin header."""
        response = client.get("/healthz", headers={"Origin": "http://localhost:5173"})
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers
