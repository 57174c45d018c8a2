import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('vet_user', 'Veterinarian'), ('admin_user', 'Administrator')], default='vet_user', max_length=20)),
                ('full_name', models.CharField(blank=True, max_length=200)),
                ('crmv', models.CharField(blank=True, max_length=40, verbose_name='CRMV')),
                ('ssn', models.CharField(blank=True, max_length=20, verbose_name='SSN')),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('professional_type', models.CharField(blank=True, choices=[('clinic', 'Clinic'), ('independent', 'Independent Professional')], max_length=20)),
                ('clinic_name', models.CharField(blank=True, max_length=200)),
                ('clinic_address', models.CharField(blank=True, max_length=300)),
                ('registration_completed', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['full_name'],
            },
        ),
    ]
