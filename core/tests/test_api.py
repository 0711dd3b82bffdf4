from unittest import mock

from django.http import Http404
from django.test import SimpleTestCase
from rest_framework import exceptions, status

from core.api import exception_handler, flatten_validation_errors
from farms.views import FarmViewSet


class FlattenValidationErrorsTest(SimpleTestCase):

    def test_nested_fields_use_dotted_paths(self):
        detail = {
            'title': ['This field is required.'],
            'subscription': {'keys': {'auth': ['Too long.']}},
            'non_field_errors': ['Broken.'],
        }
        self.assertEqual(list(flatten_validation_errors(detail)), [
            {'field': 'title', 'message': 'This field is required.'},
            {'field': 'subscription.keys.auth', 'message': 'Too long.'},
            {'field': 'non_field_errors', 'message': 'Broken.'},
        ])

    def test_list_of_objects(self):
        detail = [{}, {'event_type': ['Required.']}]
        self.assertEqual(list(flatten_validation_errors(detail)), [{'field': '1.event_type', 'message': 'Required.'}])


class ExceptionHandlerTest(SimpleTestCase):

    def test_validation_error(self):
        response = exception_handler(exceptions.ValidationError({'name': ['Too short.']}), {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {
            'error': 'Validation error',
            'details': [{'field': 'name', 'message': 'Too short.'}],
        })

    def test_not_found_names_the_resource(self):
        response = exception_handler(Http404(), {'view': FarmViewSet()})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Farm not found'})

    def test_not_found_on_plain_view(self):
        view = mock.Mock(spec=['resource_name'], resource_name='Push subscription')
        response = exception_handler(Http404(), {'view': view})
        self.assertEqual(response.data, {'error': 'Push subscription not found'})

    def test_api_errors_use_error_key(self):
        response = exception_handler(exceptions.PermissionDenied(), {})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn('error', response.data)
        self.assertNotIn('detail', response.data)

    def test_unexpected_errors_are_logged(self):
        with self.assertLogs('core.api', level='ERROR') as logs:
            response = exception_handler(RuntimeError("database is locked"), {})
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'An unexpected error occurred'})
        self.assertIn('database is locked', logs.output[0])
