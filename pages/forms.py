from django import forms
from django.utils.translation import gettext_lazy as _

from entries.models import MAX_SEED_GUESS


class TokenForm(forms.Form):
    token_code = forms.CharField(
        label=_("Enter your token"),
        max_length=64,
        error_messages={'required': _("Please enter your token.")},
        widget=forms.TextInput(attrs={'autocomplete': 'off', 'placeholder': _("e.g. ABC123")}),
    )

    def clean_token_code(self):
        # 代碼一律大寫
        return self.cleaned_data['token_code'].strip().upper()


class GuessForm(forms.Form):
    token_code = forms.CharField(widget=forms.HiddenInput, max_length=64)
    full_name = forms.CharField(
        label=_("Full name"),
        max_length=200,
        error_messages={'required': _("Please enter your full name.")},
    )
    contact_number = forms.CharField(
        label=_("Contact number"),
        max_length=50,
        error_messages={'required': _("Please enter your contact number.")},
    )


class SeedGuessForm(GuessForm):
    guess = forms.IntegerField(
        label=_("How many seeds are in the papaya?"),
        min_value=1,
        max_value=MAX_SEED_GUESS,
        error_messages={
            'required': _("Please enter your guess."),
            'min_value': _("Your guess must be a positive number."),
            'max_value': _("Your guess is too large."),
            'invalid': _("Your guess must be a positive number."),
        },
    )


class FlowerGuessForm(GuessForm):
    guess = forms.CharField(
        label=_("What is the secret flower name?"),
        max_length=200,
        error_messages={'required': _("Please enter your guess.")},
    )


GUESS_FORMS = {
    'papaya': SeedGuessForm,
    'flower': FlowerGuessForm,
}
