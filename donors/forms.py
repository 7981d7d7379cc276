from django import forms

from donors.services.compatibility import BLOOD_GROUPS
from donors.services.search import (
    AVAILABILITY_ALL,
    AVAILABILITY_AVAILABLE,
    AVAILABILITY_UNAVAILABLE,
    SearchFilters,
)


class DonorSearchForm(forms.Form):
    BLOOD_GROUP_CHOICES = [('', 'Any')] + [(group, group) for group in BLOOD_GROUPS]
    AVAILABILITY_CHOICES = [
        (AVAILABILITY_ALL, 'All donors'),
        (AVAILABILITY_AVAILABLE, 'Available only'),
        (AVAILABILITY_UNAVAILABLE, 'Unavailable only'),
    ]
    GENDER_CHOICES = [('', 'Any'), ('Male', 'Male'), ('Female', 'Female')]
    HOSTEL_CHOICES = [('all', 'All'), ('yes', 'Hostel residents'), ('no', 'Non-hostel residents')]

    blood_group = forms.ChoiceField(choices=BLOOD_GROUP_CHOICES, required=False)
    query = forms.CharField(max_length=100, required=False, strip=True)
    name = forms.CharField(max_length=100, required=False, strip=True)
    contact = forms.CharField(max_length=30, required=False, strip=True)
    city = forms.CharField(max_length=100, required=False, strip=True)
    university = forms.CharField(max_length=150, required=False, strip=True)
    availability = forms.ChoiceField(choices=AVAILABILITY_CHOICES, required=False)
    gender = forms.ChoiceField(choices=GENDER_CHOICES, required=False)
    hostel_resident = forms.ChoiceField(choices=HOSTEL_CHOICES, required=False)
    date_added_from = forms.DateField(required=False, input_formats=['%Y-%m-%d'])
    date_added_to = forms.DateField(required=False, input_formats=['%Y-%m-%d'])

    def __init__(self, data=None, *args, **kwargs):
        if data is not None and data.get('blood_group'):
            # Accept "ab+" / " O- " from query strings and the command line.
            data = data.copy()
            data['blood_group'] = str(data['blood_group']).strip().upper()
        super().__init__(data, *args, **kwargs)

    def clean(self):
        cleaned = super().clean()
        start = cleaned.get('date_added_from')
        end = cleaned.get('date_added_to')
        if start and end and start > end:
            raise forms.ValidationError('"Date added from" must be on or before "Date added to".')
        return cleaned

    def to_filters(self) -> SearchFilters:
        if not self.is_valid():
            raise ValueError('Cannot build filters from an invalid form')
        data = self.cleaned_data
        hostel = data.get('hostel_resident') or 'all'
        return SearchFilters(
            blood_group=data.get('blood_group') or None,
            query=data.get('query') or '',
            name=data.get('name') or '',
            contact=data.get('contact') or '',
            city=data.get('city') or '',
            university=data.get('university') or '',
            availability=data.get('availability') or AVAILABILITY_ALL,
            gender=data.get('gender') or None,
            hostel_resident=None if hostel == 'all' else hostel == 'yes',
            date_added_from=data.get('date_added_from'),
            date_added_to=data.get('date_added_to'),
        )
