# Generated manually for the initial registrations schema

from decimal import Decimal
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('leader_name', models.CharField(max_length=150)),
                ('name', models.CharField(max_length=150)),
                ('category', models.CharField(choices=[('adult', 'Adult'), ('teen', 'Teen'), ('exempt', 'Exempt')], max_length=10)),
                ('age', models.PositiveSmallIntegerField()),
                ('days', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'participants',
                'ordering': ['account', 'created_at', 'id'],
                'indexes': [
                    models.Index(fields=['account', 'created_at'], name='participants_account_idx'),
                    models.Index(fields=['category'], name='participants_category_idx'),
                ],
            },
        ),
    ]
