"""
Initial migration for Tallyman models.
"""

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Tallyman models: UnitOfMeasure, StockBatch, BatchLine."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='UnitOfMeasure',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Ex: Unidade, Caixa', max_length=100, unique=True, verbose_name='Nome')),
                ('short_name', models.CharField(blank=True, db_index=True, default='', help_text='Ex: un, cx', max_length=20, verbose_name='Abreviação')),
                ('kind', models.CharField(choices=[('base', 'Unidade base'), ('pack', 'Embalagem')], db_index=True, default='base', max_length=10, verbose_name='Tipo')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('units_per_pack', models.PositiveIntegerField(blank=True, help_text='Quantidade de unidades base em uma embalagem', null=True, verbose_name='Unidades por embalagem')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('base_unit', models.ForeignKey(blank=True, limit_choices_to={'kind': 'base'}, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='packs', to='tallyman.unitofmeasure', verbose_name='Unidade base')),
            ],
            options={
                'verbose_name': 'Unidade de Medida',
                'verbose_name_plural': 'Unidades de Medida',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='StockBatch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('direction', models.CharField(choices=[('in', 'Entrada'), ('out', 'Saída')], db_index=True, default='in', max_length=3, verbose_name='Direção')),
                ('batch_name', models.CharField(blank=True, db_index=True, default='', max_length=200, verbose_name='Nome do Lote')),
                ('reference', models.CharField(blank=True, default='', help_text='Ex: "NF 1234", "OS-991"', max_length=200, verbose_name='Referência')),
                ('note', models.TextField(blank=True, default='', verbose_name='Observação')),
                ('created_at', models.DateTimeField(db_index=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(db_index=True, verbose_name='Atualizado em')),
                ('reconciled', models.BooleanField(db_index=True, default=False, help_text='Falso = quantidades dos produtos ainda não aplicadas', verbose_name='Conciliado')),
                ('reconciled_at', models.DateTimeField(blank=True, null=True, verbose_name='Conciliado em')),
            ],
            options={
                'verbose_name': 'Lote de Movimentação',
                'verbose_name_plural': 'Lotes de Movimentação',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='BatchLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('product_id', models.CharField(db_index=True, max_length=64, verbose_name='ID do Produto')),
                ('name', models.CharField(max_length=255, verbose_name='Produto')),
                ('sku', models.CharField(blank=True, default='', max_length=100, verbose_name='SKU')),
                ('unit', models.CharField(blank=True, default='', max_length=100, verbose_name='Unidade')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantidade')),
                ('unit_price', models.DecimalField(blank=True, decimal_places=4, max_digits=14, null=True, verbose_name='Preço unitário')),
                ('batch_label', models.CharField(blank=True, default='', help_text='Lote do fornecedor impresso na etiqueta', max_length=100, verbose_name='Rótulo do lote')),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='lines', to='tallyman.stockbatch', verbose_name='Lote')),
            ],
            options={
                'verbose_name': 'Item do Lote',
                'verbose_name_plural': 'Itens do Lote',
                'ordering': ['batch', 'position'],
                'constraints': [models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='tallyman_batchline_quantity_positive')],
            },
        ),
    ]
