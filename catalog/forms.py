from django import forms

PRICE_ERROR = 'Price must be a number greater than or equal to zero.'


def _price_field():
    return forms.DecimalField(
        min_value=0,
        max_digits=10,
        decimal_places=2,
        error_messages={'invalid': PRICE_ERROR, 'min_value': PRICE_ERROR, 'required': PRICE_ERROR},
    )


class ExamCreateForm(forms.Form):
    name = forms.CharField(max_length=200, error_messages={'required': 'Exam name cannot be empty.'})
    description = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 2}))
    category = forms.CharField(required=False, max_length=120)
    price = _price_field()


class ExamDetailsForm(forms.Form):
    name = forms.CharField(max_length=200, error_messages={'required': 'Exam name cannot be empty.'})
    description = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 2}))
    category = forms.CharField(required=False, max_length=120)
    active = forms.BooleanField(required=False)


class ExamPriceForm(forms.Form):
    price = _price_field()


class FaqEntryForm(forms.Form):
    question = forms.CharField(max_length=300, error_messages={'required': 'Question and answer are required.'})
    answer = forms.CharField(widget=forms.Textarea(attrs={'rows': 4}), error_messages={'required': 'Question and answer are required.'})
    category = forms.CharField(required=False, max_length=120)
