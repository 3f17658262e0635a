# pages/tests/test_views.py
"""
測試多語系頁面：輸入 Token → 填寫答案 → 確認
"""
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import translation

from entries.models import FlowerResponse, Response
from tokens.models import Token


class PageTestCase(TestCase):
    """LocaleMiddleware 會在執行緒上啟用語系，每個測試從英文開始"""

    def setUp(self):
        translation.activate('en')
        self.addCleanup(translation.deactivate)


class HomePageTest(PageTestCase):
    """測試首頁 Token 輸入"""

    def setUp(self):
        super().setUp()
        self.url = reverse('pages:home')
        Token.objects.create(token_code='ABC123')
        Token.objects.create(token_code='USED01', is_used=True)
        Token.objects.create(token_code='VOID01', is_valid=False)

    def test_url_has_language_prefix(self):
        self.assertEqual(self.url, '/en/')

    def test_root_redirects_to_language(self):
        """測試沒有語系前綴時導向預設語系"""
        response = self.client.get('/')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], '/en/')

    def test_get(self):
        """測試顯示表單"""
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '<html lang="en">')
        self.assertContains(response, 'name="token_code"')

    def test_valid_token_redirects_to_guess_page(self):
        """測試可用的 Token 導向答案頁，代碼自動轉大寫"""
        response = self.client.post(self.url, {'token_code': ' abc123 '})
        self.assertRedirects(
            response, '/en/submit-guess/?token=ABC123', fetch_redirect_response=False,
        )

    def test_unknown_token(self):
        response = self.client.post(self.url, {'token_code': 'NOPE'})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'This token is invalid. Please check and try again.')

    def test_used_token(self):
        response = self.client.post(self.url, {'token_code': 'USED01'})
        self.assertContains(response, 'This token has already been used.')

    def test_not_valid_token(self):
        response = self.client.post(self.url, {'token_code': 'VOID01'})
        self.assertContains(response, 'This token is not valid for the contest.')

    def test_empty_token(self):
        """測試未輸入 Token"""
        response = self.client.post(self.url, {'token_code': ''})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Please enter your token.')

    def test_rate_limited(self):
        """測試頁面與 API 共用驗證次數限制"""
        for _ in range(15):
            self.client.post(self.url, {'token_code': 'NOPE'})
        response = self.client.post(self.url, {'token_code': 'ABC123'})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Too many requests. Please wait and try again.')

    def test_sinhala_page(self):
        """測試僧伽羅語頁面"""
        with translation.override('si'):
            url = reverse('pages:home')
        self.assertEqual(url, '/si/')

        response = self.client.get(url)

        self.assertContains(response, '<html lang="si">')
        self.assertContains(response, 'තහවුරු කරන්න')

    def test_sinhala_error_message(self):
        response = self.client.post('/si/', {'token_code': 'NOPE'})
        self.assertContains(response, 'මෙම ටෝකනය වලංගු නොවේ.')

    def test_sinhala_redirect_keeps_language(self):
        response = self.client.post('/si/', {'token_code': 'ABC123'})
        self.assertRedirects(
            response, '/si/submit-guess/?token=ABC123', fetch_redirect_response=False,
        )


class SubmitGuessPageTest(PageTestCase):
    """測試答案頁"""

    def setUp(self):
        super().setUp()
        self.url = reverse('pages:submit-guess')
        self.token = Token.objects.create(token_code='ABC123')

    def guess_data(self, **overrides):
        data = {
            'token_code': 'ABC123',
            'full_name': 'Amal Perera',
            'contact_number': '0771234567',
            'guess': 'Nelum',
        }
        data.update(overrides)
        return data

    def test_missing_token(self):
        """測試沒有 Token 時顯示提示且不顯示表單"""
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Token is missing. Please start from the home page.')
        self.assertNotContains(response, 'name="full_name"')

    def test_get_with_token(self):
        response = self.client.get(self.url, {'token': 'ABC123'})
        self.assertContains(response, 'Secret Flower Challenge')
        self.assertContains(response, 'value="ABC123"')

    def test_flower_submission(self):
        """測試花名答案送出後導向確認頁"""
        response = self.client.post(self.url, self.guess_data())

        self.assertRedirects(response, reverse('pages:confirmation'))
        self.assertEqual(FlowerResponse.objects.get().secret_flower_name, 'Nelum')
        self.token.refresh_from_db()
        self.assertTrue(self.token.is_used)

    @override_settings(CONTEST_PAGE_VARIANT='papaya')
    def test_papaya_variant(self):
        """測試種子數量版本"""
        page = self.client.get(self.url, {'token': 'ABC123'})
        self.assertContains(page, 'Papaya Seed Challenge')

        response = self.client.post(self.url, self.guess_data(guess='120'))

        self.assertRedirects(response, reverse('pages:confirmation'))
        self.assertEqual(Response.objects.get().papaya_seed_guess, 120)

    @override_settings(CONTEST_PAGE_VARIANT='papaya')
    def test_papaya_guess_must_be_positive(self):
        response = self.client.post(self.url, self.guess_data(guess='0'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Your guess must be a positive number.')
        self.assertEqual(Response.objects.count(), 0)

    @override_settings(CONTEST_PAGE_VARIANT='papaya')
    def test_papaya_guess_too_large(self):
        """測試超出範圍的數字顯示錯誤訊息而非伺服器錯誤"""
        response = self.client.post(self.url, self.guess_data(guess='100000000000000000000'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Your guess is too large.')
        self.assertEqual(Response.objects.count(), 0)
        self.token.refresh_from_db()
        self.assertFalse(self.token.is_used)

    def test_missing_fields(self):
        """測試欄位未填"""
        response = self.client.post(self.url, self.guess_data(full_name='', guess=''))
        self.assertContains(response, 'Please enter your full name.')
        self.assertContains(response, 'Please enter your guess.')
        self.token.refresh_from_db()
        self.assertFalse(self.token.is_used)

    def test_second_submission(self):
        """測試同一個 Token 不能再送"""
        self.client.post(self.url, self.guess_data())
        response = self.client.post(self.url, self.guess_data(guess='Rose'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'This token has already been used.')
        self.assertEqual(FlowerResponse.objects.count(), 1)

    def test_unknown_token(self):
        response = self.client.post(self.url, self.guess_data(token_code='NOPE'))
        self.assertContains(response, 'This token is invalid. Please check and try again.')

    @override_settings(CONTEST_TYPES=['papaya'])
    def test_closed_variant(self):
        """測試頁面版本的競賽未啟用"""
        response = self.client.post(self.url, self.guess_data())
        self.assertContains(response, 'This contest is not accepting submissions.')

    def test_rate_limited(self):
        for _ in range(5):
            self.client.post(self.url, self.guess_data(token_code='NOPE'))
        response = self.client.post(self.url, self.guess_data())
        self.assertContains(response, 'Too many requests. Please wait and try again.')
        self.token.refresh_from_db()
        self.assertFalse(self.token.is_used)


class ConfirmationPageTest(PageTestCase):

    def test_confirmation(self):
        response = self.client.get(reverse('pages:confirmation'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Submission received')

    def test_sinhala_confirmation(self):
        response = self.client.get('/si/confirmation/')
        self.assertContains(response, '<html lang="si">')
