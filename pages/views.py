import logging
from urllib.parse import urlencode

from django.conf import settings
from django.db import DatabaseError
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_http_methods

from entries.exceptions import (
    ContestClosed,
    DuplicateSubmission,
    InvalidToken,
    SubmissionError,
    TokenAlreadyUsed,
    TokenNotValid,
)
from entries.services import submit_entry
from tokens.ratelimit import get_client_ip, get_rate_limiter
from tokens.services import REASON_NOT_FOUND, REASON_NOT_VALID, REASON_USED, validate_token

from .forms import GUESS_FORMS, TokenForm

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    'invalid_token': _("This token is invalid. Please check and try again."),
    'token_not_valid': _("This token is not valid for the contest."),
    'token_used': _("This token has already been used."),
    'token_missing': _("Token is missing. Please start from the home page."),
    'too_many_requests': _("Too many requests. Please wait and try again."),
    'submission_error': _("Something went wrong. Please try again."),
    'contest_closed': _("This contest is not accepting submissions."),
}

_VERDICT_ERRORS = {
    REASON_NOT_FOUND: 'invalid_token',
    REASON_NOT_VALID: 'token_not_valid',
    REASON_USED: 'token_used',
}

_SUBMISSION_ERRORS = {
    InvalidToken: 'invalid_token',
    TokenNotValid: 'token_not_valid',
    TokenAlreadyUsed: 'token_used',
    DuplicateSubmission: 'token_used',
    ContestClosed: 'contest_closed',
}


def page_rate_limited(request, scope):
    """頁面表單與 API 共用同一組限制器；限制器出錯時放行"""
    try:
        result = get_rate_limiter(scope).check(get_client_ip(request))
    except Exception as e:
        logger.error(f"Rate limit error: {e}")
        return False
    return not result.success


def guess_form_class():
    return GUESS_FORMS.get(settings.CONTEST_PAGE_VARIANT, GUESS_FORMS['flower'])


@require_http_methods(["GET", "POST"])
def home(request):
    error = None
    form = TokenForm(request.POST or None)

    if request.method == 'POST' and form.is_valid():
        token_code = form.cleaned_data['token_code']
        if page_rate_limited(request, 'validate_token'):
            error = ERROR_MESSAGES['too_many_requests']
        else:
            try:
                verdict = validate_token(token_code)
            except DatabaseError:
                logger.exception("Token validation error")
                verdict = None
                error = ERROR_MESSAGES['submission_error']

            if verdict is not None:
                if verdict.valid:
                    url = reverse('pages:submit-guess')
                    return redirect(f"{url}?{urlencode({'token': token_code})}")
                error = ERROR_MESSAGES[_VERDICT_ERRORS[verdict.reason]]

    return render(request, 'pages/home.html', {'form': form, 'error': error})


@require_http_methods(["GET", "POST"])
def submit_guess(request):
    form_class = guess_form_class()
    variant = settings.CONTEST_PAGE_VARIANT
    error = None

    if request.method == 'POST':
        form = form_class(request.POST)
        token_code = request.POST.get('token_code', '')
    else:
        token_code = request.GET.get('token', '').strip()
        form = form_class(initial={'token_code': token_code})

    if not token_code:
        error = ERROR_MESSAGES['token_missing']
    elif request.method == 'POST' and form.is_valid():
        if page_rate_limited(request, 'submit'):
            error = ERROR_MESSAGES['too_many_requests']
        else:
            try:
                submit_entry(
                    token_code=form.cleaned_data['token_code'],
                    contest_type=variant,
                    full_name=form.cleaned_data['full_name'],
                    contact_number=form.cleaned_data['contact_number'],
                    guess=form.cleaned_data['guess'],
                )
            except SubmissionError as e:
                error = ERROR_MESSAGES[_SUBMISSION_ERRORS.get(type(e), 'submission_error')]
            except Exception:
                logger.exception("Submission Error")
                error = ERROR_MESSAGES['submission_error']
            else:
                return redirect('pages:confirmation')

    return render(request, 'pages/submit_guess.html', {
        'form': form,
        'error': error,
        'variant': variant,
        'token_code': token_code,
    })


def confirmation(request):
    return render(request, 'pages/confirmation.html')
