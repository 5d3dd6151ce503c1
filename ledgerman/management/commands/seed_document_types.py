"""
Management command to seed the standard document types of an organization.

Usage:
    python manage.py seed_document_types 1
    python manage.py seed_document_types 1 --dry-run

Existing types (same organization and code) are updated, others created.
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from ledgerman.models import DocumentDirection, DocumentTypeConfig, Organization


STANDARD_DOCUMENT_TYPES = [
    {
        'code': 'PRO',
        'description': 'Preventivo',
        'numerator_code': 'PRO',
        'inventory_movement': False,
        'operation_sign_stock': None,
        'valuation_impact': False,
        'operation_sign_valuation': None,
    },
    {
        'code': 'ORD',
        'description': 'Ordine',
        'numerator_code': 'ORD',
        'inventory_movement': False,
        'operation_sign_stock': None,
        'valuation_impact': False,
        'operation_sign_valuation': None,
    },
    {
        'code': 'DDT',
        'description': 'DDT Vendita',
        'numerator_code': 'DDT',
        'inventory_movement': True,
        'operation_sign_stock': -1,  # scarico
        'valuation_impact': False,
        'operation_sign_valuation': None,
    },
    {
        'code': 'FAI',
        'description': 'Fattura Immediata',
        'numerator_code': 'FAT',
        'inventory_movement': True,
        'operation_sign_stock': -1,  # scarico
        'valuation_impact': True,
        'operation_sign_valuation': 1,  # ricavi +
    },
    {
        'code': 'FAD',
        'description': 'Fattura Differita',
        'numerator_code': 'FAT',
        'inventory_movement': False,
        'operation_sign_stock': None,
        'valuation_impact': True,
        'operation_sign_valuation': 1,
    },
    {
        'code': 'NDC',
        'description': 'Nota di Credito',
        'numerator_code': 'FAT',
        'inventory_movement': True,
        'operation_sign_stock': 1,  # reso, carico
        'valuation_impact': True,
        'operation_sign_valuation': -1,  # ricavi -
    },
]


class Command(BaseCommand):
    """Seed standard document types command."""

    help = 'Crea o aggiorna i tipi documento standard di un\'organizzazione'

    def add_arguments(self, parser):
        parser.add_argument('organization_id', type=int)
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Mostra cosa verrebbe creato o aggiornato senza scrivere'
        )

    def handle(self, *args, **options):
        try:
            organization = Organization.objects.get(pk=options['organization_id'])
        except Organization.DoesNotExist:
            raise CommandError(f"Organizzazione {options['organization_id']} non trovata")

        existing = set(
            DocumentTypeConfig.objects.filter(organization=organization)
            .values_list('code', flat=True)
        )

        if options['dry_run']:
            for entry in STANDARD_DOCUMENT_TYPES:
                action = 'aggiornato' if entry['code'] in existing else 'creato'
                self.stdout.write(f"{entry['code']} - {entry['description']}: sarebbe {action}")
            return

        created_count = updated_count = 0
        with transaction.atomic():
            for entry in STANDARD_DOCUMENT_TYPES:
                defaults = {k: v for k, v in entry.items() if k != 'code'}
                defaults['direction'] = DocumentDirection.SALE
                defaults['active'] = True
                _obj, created = DocumentTypeConfig.objects.update_or_create(
                    organization=organization,
                    code=entry['code'],
                    defaults=defaults,
                )
                if created:
                    created_count += 1
                else:
                    updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f'{created_count} tipo/i creato/i, {updated_count} aggiornato/i'
            )
        )
