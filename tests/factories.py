"""Registration payloads shared by the tests."""

STUDENT = dict(
    full_name="Ada Student",
    email="a@u.edu",
    role="student",
    rfid_tag="R1",
    fingerprint_token="F1",
    matric_number="X1",
    faculty="computing",
    department="cs",
)

TEACHER = dict(
    full_name="Tom Teacher",
    email="t@u.edu",
    role="teacher",
    rfid_tag="T1",
    fingerprint_token="TF1",
    staff_id="S1",
    designation="Lecturer",
)

JWT_SECRET = "unit-test-jwt-secret-0123456789abcdef0123"
