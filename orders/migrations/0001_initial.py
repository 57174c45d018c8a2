import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AppSetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=100, unique=True)),
                ('value', models.TextField(blank=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['key'],
            },
        ),
        migrations.CreateModel(
            name='ExamOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('vet_name_snapshot', models.CharField(blank=True, max_length=200)),
                ('vet_email_snapshot', models.CharField(blank=True, max_length=254)),
                ('vet_crmv_snapshot', models.CharField(blank=True, max_length=40)),
                ('vet_clinic_name', models.CharField(blank=True, max_length=200)),
                ('vet_clinic_address', models.CharField(blank=True, max_length=300)),
                ('vet_professional_type', models.CharField(blank=True, choices=[('clinic', 'Clinic'), ('independent', 'Independent Professional')], max_length=20)),
                ('owner_name', models.CharField(max_length=200)),
                ('owner_ssn', models.CharField(max_length=20, verbose_name='Owner SSN')),
                ('owner_phone', models.CharField(max_length=20)),
                ('owner_address', models.CharField(blank=True, max_length=300)),
                ('owner_email', models.EmailField(blank=True, max_length=254)),
                ('patient_name', models.CharField(max_length=100)),
                ('species', models.CharField(max_length=100)),
                ('breed', models.CharField(blank=True, max_length=100)),
                ('age_years', models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
                ('weight_kg', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('neuter_status', models.CharField(blank=True, choices=[('neutered', 'Neutered'), ('not_neutered', 'Not neutered'), ('unknown', 'Unknown')], max_length=20)),
                ('reactive_status', models.CharField(blank=True, choices=[('reactive', 'Reactive'), ('not_reactive', 'Not reactive')], max_length=20)),
                ('sex', models.CharField(blank=True, max_length=20)),
                ('clinical_notes', models.TextField(blank=True)),
                ('selected_exams', models.JSONField(default=list)),
                ('total_value', models.DecimalField(decimal_places=2, max_digits=10)),
                ('status', models.CharField(choices=[('requested', 'Requested'), ('scheduled', 'Scheduled'), ('in_progress', 'In Progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], db_index=True, default='requested', max_length=20)),
                ('scheduled_for', models.DateTimeField(blank=True, null=True)),
                ('admin_notes', models.TextField(blank=True)),
                ('request_collection', models.BooleanField(default=False)),
                ('driver_collection_requested', models.BooleanField(default=False)),
                ('driver_requested_at', models.DateTimeField(blank=True, null=True)),
                ('sample_received_at', models.DateTimeField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('vet', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='exam_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['vet', 'created_at'], name='orders_exam_vet_id_3f1c2a_idx'),
                    models.Index(fields=['request_collection', 'sample_received_at'], name='orders_exam_request_8b7e4d_idx'),
                ],
            },
        ),
    ]
