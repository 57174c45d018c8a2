"""Request-level tests for the vet and administrator pages."""

from decimal import Decimal

import pytest
from django.urls import reverse

from accounts.models import Profile
from catalog.models import ExamCatalogItem
from orders.models import ExamOrder
from orders.services.collection import toggle_driver_requested
from orders.services.repository import create_order
from orders.services.settings_store import save_driver_phone

pytestmark = pytest.mark.django_db


def _messages(response):
    return [str(message) for message in response.context['messages']]


class TestRouting:
    def test_anonymous_is_sent_to_login(self, client):
        response = client.get(reverse('root_home'))
        assert response.status_code == 302
        assert response.url == reverse('login')

    def test_incomplete_vet_is_sent_to_registration(self, client, new_vet):
        client.force_login(new_vet)
        assert client.get(reverse('root_home')).url == reverse('accounts:registration')
        assert client.get(reverse('orders:vet_new_order')).url == reverse('accounts:registration')

    def test_roles_land_on_their_home(self, client, vet_user, admin_user):
        client.force_login(vet_user)
        assert client.get(reverse('root_home')).url == reverse('orders:vet_home')
        client.force_login(admin_user)
        assert client.get(reverse('root_home')).url == reverse('orders:admin_orders')

    def test_vet_cannot_open_admin_pages(self, client, vet_user):
        client.force_login(vet_user)
        assert client.get(reverse('orders:admin_orders')).status_code == 403
        assert client.get(reverse('catalog:admin_exams')).status_code == 403

    def test_user_without_role_sees_missing_profile(self, client, make_user):
        user = make_user('ghost')
        Profile.objects.filter(user=user).delete()
        client.force_login(user)
        response = client.get(reverse('root_home'))
        assert response.url == reverse('accounts:missing_profile')
        assert client.get(response.url).status_code == 403


def test_registration_completes_profile(client, new_vet):
    client.force_login(new_vet)
    response = client.post(
        reverse('accounts:registration'),
        {
            'full_name': 'Carla Dias',
            'crmv': 'MG-77',
            'ssn': '12345678901',
            'phone': '31987654321',
            'professional_type': Profile.TYPE_INDEPENDENT,
        },
    )
    assert response.status_code == 302
    assert response.url == reverse('orders:vet_home')
    new_vet.profile.refresh_from_db()
    assert new_vet.profile.is_registration_complete()


class TestVetOrders:
    def _post_data(self, catalog, **overrides):
        data = {
            'owner_name': 'Maria Silva',
            'owner_ssn': '11122233344',
            'owner_phone': '11912345678',
            'patient_name': 'Rex',
            'species': 'Dog',
            'age_years': '3',
            'request_collection': 'on',
            'exam_ids': [str(catalog[0].id), str(catalog[2].id)],
            'total_value': '1.00',
        }
        data.update(overrides)
        return data

    def test_submit_order_prices_on_server(self, client, vet_user, catalog):
        client.force_login(vet_user)
        response = client.post(reverse('orders:vet_new_order'), self._post_data(catalog), follow=True)

        assert response.redirect_chain == [(reverse('orders:vet_history'), 302)]
        order = ExamOrder.objects.get()
        assert order.total_value == Decimal('200.00')
        assert order.request_collection is True
        assert order.owner_ssn == '111.222.333-44'
        assert _messages(response) == [f'Exam order #{order.pk} sent successfully.']

    def test_submit_without_exams_keeps_form(self, client, vet_user, catalog):
        client.force_login(vet_user)
        response = client.post(reverse('orders:vet_new_order'), self._post_data(catalog, exam_ids=[]))

        assert response.status_code == 200
        assert ExamOrder.objects.count() == 0
        assert 'Select at least one exam before sending the order.' in _messages(response)

    def test_price_preview(self, client, vet_user, catalog):
        client.force_login(vet_user)
        response = client.get(
            reverse('orders:price_preview_api'),
            {'exam_ids': [catalog[0].id, catalog[1].id, 'x']},
        )
        data = response.json()
        assert data['total'] == '125.50'
        assert data['total_display'] == '$125.50'
        assert [line['exam_name'] for line in data['lines']] == ['Complete Blood Count', 'Urinalysis']

    def test_history_lists_only_own_orders(self, client, vet_user, independent_vet, order, order_draft):
        create_order(independent_vet, dict(order_draft, patient_name='Mia'))
        client.force_login(vet_user)
        response = client.get(reverse('orders:vet_history'))
        assert list(response.context['orders']) == [order]


class TestAdminOrders:
    def test_orders_page_shows_driver_link(self, client, admin_user, order):
        save_driver_phone('5511987654321')
        client.force_login(admin_user)
        response = client.get(reverse('orders:admin_orders'))

        assert response.status_code == 200
        row = response.context['rows'][0]
        assert row['driver_url'].startswith('https://wa.me/5511987654321?text=')
        assert row['reminder_url'] is None
        assert response.context['live_refresh_seconds'] == 60
        assert response.context['has_live_collections'] is True
        assert response.context['changed_at'] == order.updated_at.isoformat()

    def test_no_links_without_driver_phone(self, client, admin_user, order):
        client.force_login(admin_user)
        response = client.get(reverse('orders:admin_orders'))
        assert response.context['rows'][0]['driver_url'] is None
        assert response.context['has_valid_driver_phone'] is False

    def test_update_order(self, client, admin_user, order):
        client.force_login(admin_user)
        prefix = f'order-{order.pk}'
        response = client.post(
            reverse('orders:admin_update_order', args=[order.pk]),
            {
                f'{prefix}-status': ExamOrder.STATUS_SCHEDULED,
                f'{prefix}-scheduled_for': '2026-03-05T09:30',
                f'{prefix}-admin_notes': 'Fasting required',
                f'{prefix}-version': order.version,
            },
            follow=True,
        )
        assert _messages(response) == ['Order updated.']
        order.refresh_from_db()
        assert order.status == ExamOrder.STATUS_SCHEDULED
        assert order.scheduled_for is not None
        assert order.admin_notes == 'Fasting required'

    def test_stale_update_is_rejected(self, client, admin_user, order):
        toggle_driver_requested(order.pk, True)
        client.force_login(admin_user)
        prefix = f'order-{order.pk}'
        response = client.post(
            reverse('orders:admin_update_order', args=[order.pk]),
            {f'{prefix}-status': ExamOrder.STATUS_CANCELLED, f'{prefix}-version': 1},
            follow=True,
        )
        assert _messages(response) == ['This order was changed by someone else. Reload the page and try again.']
        order.refresh_from_db()
        assert order.status == ExamOrder.STATUS_REQUESTED

    def test_driver_toggle_and_sample_receipt(self, client, admin_user, order):
        client.force_login(admin_user)
        response = client.post(
            reverse('orders:admin_driver_collection', args=[order.pk]),
            {'driver_collection_requested': 'on', 'version': 1},
            follow=True,
        )
        assert _messages(response) == ['Driver request saved.']

        response = client.post(reverse('orders:admin_sample_received', args=[order.pk]), {'version': 2}, follow=True)
        assert _messages(response) == ['Sample receipt saved.']
        order.refresh_from_db()
        assert order.sample_received_at is not None

        response = client.post(reverse('orders:admin_driver_collection', args=[order.pk]), {'version': 3}, follow=True)
        assert _messages(response) == ['Driver request cleared.']
        order.refresh_from_db()
        assert order.driver_requested_at is None
        assert order.sample_received_at is None

    def test_sample_receipt_needs_driver(self, client, admin_user, order):
        client.force_login(admin_user)
        response = client.post(reverse('orders:admin_sample_received', args=[order.pk]), follow=True)
        assert _messages(response) == ['Request the driver before marking the sample as received.']

    def test_bad_version_keeps_driver_tracking(self, client, admin_user, order):
        requested_at = toggle_driver_requested(order.pk, True).driver_requested_at
        client.force_login(admin_user)
        response = client.post(
            reverse('orders:admin_driver_collection', args=[order.pk]),
            {'driver_collection_requested': 'on', 'version': 'abc'},
            follow=True,
        )
        assert _messages(response) == ['Enter a whole number.']
        order.refresh_from_db()
        assert order.driver_collection_requested is True
        assert order.driver_requested_at == requested_at
        assert order.version == 2

    def test_bad_version_does_not_mark_sample(self, client, admin_user, order):
        toggle_driver_requested(order.pk, True)
        client.force_login(admin_user)
        response = client.post(
            reverse('orders:admin_sample_received', args=[order.pk]),
            {'version': 'abc'},
            follow=True,
        )
        assert _messages(response) == ['Enter a whole number.']
        order.refresh_from_db()
        assert order.sample_received_at is None
        assert order.version == 2

    def test_second_sample_receipt_is_rejected(self, client, admin_user, order):
        toggle_driver_requested(order.pk, True)
        client.force_login(admin_user)
        client.post(reverse('orders:admin_sample_received', args=[order.pk]), {'version': 2})
        received_at = ExamOrder.objects.get(pk=order.pk).sample_received_at

        response = client.post(reverse('orders:admin_sample_received', args=[order.pk]), follow=True)
        assert _messages(response) == ['Sample receipt was already recorded for this order.']
        order.refresh_from_db()
        assert order.sample_received_at == received_at

    def test_invalid_driver_phone(self, client, admin_user):
        client.force_login(admin_user)
        response = client.post(reverse('orders:admin_driver_phone'), {'driver_phone': '11 98765-4321'}, follow=True)
        assert _messages(response) == ['Driver phone must have 13 digits in the format +00 (00) 00000-0000.']

    def test_state_api(self, client, admin_user, order):
        client.force_login(admin_user)
        data = client.get(reverse('orders:admin_orders_state_api')).json()
        assert data['orders'][0]['id'] == order.pk
        assert data['orders'][0]['collection_state'] == 'requested'
        assert data['changed_at'] is not None

    def test_history_csv(self, client, admin_user, order):
        client.force_login(admin_user)
        response = client.get(reverse('orders:admin_history_csv'), {'range': 'all'})

        assert response['Content-Type'] == 'text/csv; charset=utf-8'
        assert response['Content-Disposition'].startswith('attachment; filename="cvde-exam-history-')
        body = response.content.decode('utf-8')
        assert body.startswith('\ufeff"Report","CVDE Exam History Export"')
        assert '"Complete Blood Count","Ana Souza","Clinica Centro","$80.00"' in body

    def test_history_page(self, client, admin_user, order):
        client.force_login(admin_user)
        response = client.get(reverse('orders:admin_history'))
        assert response.status_code == 200
        assert response.context['top_exams'] == [('Complete Blood Count', 1), ('Urinalysis', 1)]
        assert response.context['total_value'] == Decimal('125.50')


class TestAdminCatalog:
    def test_create_exam(self, client, admin_user):
        client.force_login(admin_user)
        response = client.post(
            reverse('catalog:admin_create_exam'),
            {'name': 'Cytology', 'price': '60.00', 'category': 'Cytology'},
            follow=True,
        )
        assert _messages(response) == ['Exam created.']
        assert ExamCatalogItem.objects.get().current_price == Decimal('60.00')

    def test_duplicate_exam_name(self, client, admin_user, catalog):
        client.force_login(admin_user)
        response = client.post(reverse('catalog:admin_create_exam'), {'name': 'Urinalysis', 'price': '5'}, follow=True)
        assert _messages(response) == ['An exam with this name already exists.']

    def test_negative_price(self, client, admin_user, catalog):
        client.force_login(admin_user)
        response = client.post(reverse('catalog:admin_update_exam_price', args=[catalog[0].id]), {'price': '-1'}, follow=True)
        assert _messages(response) == ['Price must be a number greater than or equal to zero.']
