"""
Widen BatchLine.unit_price so any price the API accepts fits the column.
"""

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('tallyman', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='batchline',
            name='unit_price',
            field=models.DecimalField(blank=True, decimal_places=4, max_digits=24, null=True, verbose_name='Preço unitário'),
        ),
    ]
