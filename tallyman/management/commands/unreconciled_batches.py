"""
Management command to list batches whose quantities were never applied.

A batch is written before reconciliation; if the process dies (or a
product update fails) in between, the batch stays with reconciled=False.
This command only finds them. It does not re-apply anything.

Usage:
    python manage.py unreconciled_batches
    python manage.py unreconciled_batches --older-than 10
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from tallyman.models import StockBatch


class Command(BaseCommand):
    """List unreconciled batches command."""

    help = 'Lista lotes de movimentação não conciliados'

    def add_arguments(self, parser):
        parser.add_argument(
            '--older-than',
            type=int,
            default=0,
            metavar='MINUTES',
            help='Ignora lotes criados há menos de MINUTES minutos'
        )

    def handle(self, *args, **options):
        qs = StockBatch.objects.unreconciled().with_summary().order_by('created_at')
        if options['older_than']:
            cutoff = timezone.now() - timedelta(minutes=options['older_than'])
            qs = qs.filter(created_at__lt=cutoff)

        count = 0
        for batch in qs:
            count += 1
            self.stdout.write(
                f'{batch.pk}\t{batch.direction}\t{batch.created_at:%Y-%m-%d %H:%M}\t'
                f'{batch.item_count}\t{batch.batch_name or batch.reference}'
            )

        if count:
            self.stdout.write(self.style.WARNING(f'{count} lote(s) não conciliado(s)'))
        else:
            self.stdout.write(self.style.SUCCESS('Nenhum lote pendente'))
