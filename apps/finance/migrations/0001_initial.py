# Generated manually for the initial finance schema

from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Ledger',
            fields=[
                ('account', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='ledger', serialize=False, to=settings.AUTH_USER_MODEL)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('paid', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('partial', 'Partial'), ('settled', 'Settled')], default='pending', max_length=10)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'ledgers',
                'indexes': [models.Index(fields=['status'], name='ledgers_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('date', models.DateField()),
                ('status', models.CharField(choices=[('validated', 'Validated'), ('rejected', 'Rejected')], default='validated', max_length=10)),
                ('source', models.CharField(choices=[('manual', 'Manual entry'), ('receipt_scan', 'Receipt scan'), ('import', 'Import')], default='manual', max_length=20)),
                ('note', models.TextField(blank=True)),
                ('receipt', models.BinaryField(blank=True, editable=False, null=True)),
                ('receipt_content_type', models.CharField(blank=True, max_length=100)),
                ('receipt_filename', models.CharField(blank=True, max_length=255)),
                ('seen_by_admin', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['account', 'status'], name='payments_account_status_idx'),
                    models.Index(fields=['seen_by_admin', 'created_at'], name='payments_unseen_idx'),
                    models.Index(fields=['date'], name='payments_date_idx'),
                ],
            },
        ),
    ]
