from django.test import SimpleTestCase, override_settings
from rest_framework import exceptions as drf_exceptions
from rest_framework.test import APIRequestFactory

from api.exceptions import (
    ApiError,
    InternalError,
    NotFoundError,
    ValidationError,
    api_exception_handler,
    create_error_response,
)
from api.validators import parse_number


def handle(exc):
    request = APIRequestFactory().get("/bible/search")
    return api_exception_handler(exc, {"request": request, "view": None})


def raised(exc):
    try:
        raise exc
    except Exception as caught:
        return caught


class ApiErrorTests(SimpleTestCase):
    def test_status_codes(self):
        self.assertEqual(ValidationError("bad").status_code, 400)
        self.assertEqual(NotFoundError("gone").status_code, 404)
        self.assertEqual(InternalError().status_code, 500)

    def test_message_and_details(self):
        error = ApiError("Teapot", status_code=418, details={"why": "short and stout"})

        self.assertEqual(error.status_code, 418)
        self.assertEqual(error.message, "Teapot")
        self.assertEqual(error.details, {"why": "short and stout"})

    def test_default_message(self):
        self.assertEqual(NotFoundError().message, "Not Found")


class CreateErrorResponseTests(SimpleTestCase):
    def test_fields(self):
        body = create_error_response(404, "Book 'x' not found")

        self.assertEqual(set(body), {"status", "statusCode", "message", "timestamp"})
        self.assertEqual((body["status"], body["statusCode"], body["message"]), ("error", 404, "Book 'x' not found"))
        self.assertTrue(body["timestamp"].endswith("Z"))

    def test_details_only_when_given(self):
        self.assertEqual(create_error_response(400, "bad", details=["a"])["details"], ["a"])
        self.assertNotIn("details", create_error_response(400, "bad"))


class ParseNumberTests(SimpleTestCase):
    def test_valid(self):
        self.assertEqual(parse_number("12", "Chapter"), 12)

    def test_invalid(self):
        with self.assertRaisesMessage(ValidationError, "Verse number must be a valid number"):
            parse_number("twelve", "Verse")


class ApiExceptionHandlerTests(SimpleTestCase):
    @override_settings(DEBUG=False)
    def test_unexpected_exception_is_a_bare_500(self):
        response = handle(raised(RuntimeError("boom")))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["statusCode"], 500)
        self.assertEqual(response.data["message"], "Internal Server Error")
        self.assertNotIn("details", response.data)

    @override_settings(DEBUG=True)
    def test_traceback_is_included_in_debug(self):
        response = handle(raised(RuntimeError("boom")))

        self.assertEqual(response.status_code, 500)
        self.assertIn("RuntimeError: boom", response.data["details"])

    @override_settings(DEBUG=True)
    def test_drf_errors_keep_their_status(self):
        response = handle(drf_exceptions.Throttled(wait=5))

        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.data["status"], "error")
        self.assertEqual(response.data["statusCode"], 429)
        self.assertNotIn("details", response.data)

    def test_field_errors_become_details(self):
        response = handle(drf_exceptions.ValidationError({"query": ["This field is required."]}))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "Invalid request")
        self.assertEqual(response.data["details"], {"query": ["This field is required."]})

    def test_api_errors_keep_message_and_details(self):
        response = handle(NotFoundError("Book 'x' not found", details={"slug": "x"}))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["message"], "Book 'x' not found")
        self.assertEqual(response.data["details"], {"slug": "x"})
