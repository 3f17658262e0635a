"""
測試健康檢查與 API 文件路由
"""
from unittest import mock

from django.db import OperationalError
from django.test import TestCase
from django.urls import reverse

from tokens.cache.backends import SweepingLocMemCache
from tokens.models import Token
from tokens.services import validate_token


class HealthCheckTest(TestCase):

    def test_root(self):
        response = self.client.get(reverse('health'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'ok'})

    def test_database(self):
        response = self.client.get(reverse('health-db'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'db': 'ok'})

    def test_database_unavailable(self):
        """測試資料庫無法連線時回 503"""
        with mock.patch('contest_site.views.connection') as connection:
            connection.cursor.side_effect = OperationalError("down")
            response = self.client.get(reverse('health-db'))
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {'db': 'unavailable'})


    def test_cache_stats(self):
        """測試回報 web 行程內的快取項目數與命中率"""
        Token.objects.create(token_code='ABC123')
        validate_token('ABC123')
        validate_token('ABC123')

        response = self.client.get(reverse('health-cache'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            'entries': 1,
            'hits': 1,
            'misses': 1,
            'hitRate': 0.5,
            'byReason': {'valid': {'hits': 1, 'misses': 1}},
        })

    def test_cache_stats_empty(self):
        response = self.client.get(reverse('health-cache'))
        self.assertEqual(response.json()['entries'], 0)
        self.assertEqual(response.json()['hitRate'], 0.0)

    def test_cache_size_failure(self):
        with mock.patch.object(SweepingLocMemCache, 'size', side_effect=RuntimeError("boom")):
            with self.assertLogs('contest_site.views', level='ERROR'):
                response = self.client.get(reverse('health-cache'))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['entries'])

class SchemaTest(TestCase):

    def test_schema_lists_endpoints(self):
        """測試 OpenAPI schema 包含兩個 API"""
        response = self.client.get(reverse('schema'), HTTP_ACCEPT='application/json')
        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('/api/validate-token', content)
        self.assertIn('/api/submit', content)
