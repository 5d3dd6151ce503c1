"""
Initial migration for Ledgerman models.
"""

from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import ledgerman.fiscal


class Migration(migrations.Migration):
    """Create Ledgerman models: tenants, catalog, documents, ledger, installments."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Organization',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Ragione sociale')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Organizzazione',
                'verbose_name_plural': 'Organizzazioni',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=20, verbose_name='Codice')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='warehouses', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Magazzino',
                'verbose_name_plural': 'Magazzini',
                'ordering': ['code'],
                'constraints': [models.UniqueConstraint(fields=('organization', 'code'), name='unique_warehouse_code_per_organization')],
            },
        ),
        migrations.CreateModel(
            name='ProductType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=20, verbose_name='Codice')),
                ('name', models.CharField(max_length=100, verbose_name='Descrizione')),
                ('manage_stock', models.BooleanField(default=True, help_text='Se False, i prodotti di questo tipo non generano movimenti.', verbose_name='Gestisce magazzino')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='product_types', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Tipo prodotto',
                'verbose_name_plural': 'Tipi prodotto',
                'ordering': ['code'],
                'constraints': [models.UniqueConstraint(fields=('organization', 'code'), name='unique_product_type_code_per_organization')],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=50, verbose_name='Codice')),
                ('name', models.CharField(max_length=255, verbose_name='Descrizione')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('default_warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='ledgerman.warehouse', verbose_name='Magazzino predefinito')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to='ledgerman.organization', verbose_name='Organizzazione')),
                ('product_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='ledgerman.producttype', verbose_name='Tipo prodotto')),
            ],
            options={
                'verbose_name': 'Prodotto',
                'verbose_name_plural': 'Prodotti',
                'ordering': ['code'],
                'constraints': [models.UniqueConstraint(fields=('organization', 'code'), name='unique_product_code_per_organization')],
            },
        ),
        migrations.CreateModel(
            name='Entity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('business_name', models.CharField(max_length=255, verbose_name='Ragione sociale')),
                ('entity_type', models.CharField(choices=[('client', 'Cliente'), ('supplier', 'Fornitore'), ('both', 'Cliente e fornitore')], default='client', max_length=20, verbose_name='Tipo')),
                ('vat_number', models.CharField(blank=True, default='', max_length=11, validators=[ledgerman.fiscal.vat_number_validator], verbose_name='Partita IVA')),
                ('fiscal_code', models.CharField(blank=True, default='', max_length=16, validators=[ledgerman.fiscal.fiscal_code_validator], verbose_name='Codice fiscale')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entities', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Anagrafica',
                'verbose_name_plural': 'Anagrafiche',
                'ordering': ['business_name'],
            },
        ),
        migrations.CreateModel(
            name='DocumentTypeConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(help_text='Es: DDT, FAI, NDC, OF', max_length=20, validators=[django.core.validators.RegexValidator('^[A-Z0-9_]{2,20}$', 'Codice: 2-20 caratteri tra lettere maiuscole, numeri e underscore')], verbose_name='Codice')),
                ('description', models.CharField(max_length=200, verbose_name='Descrizione')),
                ('numerator_code', models.CharField(blank=True, default='', max_length=50, verbose_name='Codice numeratore')),
                ('direction', models.CharField(choices=[('sale', 'Vendita'), ('purchase', 'Acquisto'), ('internal', 'Interno')], default='sale', max_length=20, verbose_name='Direzione')),
                ('inventory_movement', models.BooleanField(default=False, verbose_name='Movimenta magazzino')),
                ('operation_sign_stock', models.SmallIntegerField(blank=True, choices=[(1, 'Carico / incremento'), (-1, 'Scarico / decremento')], null=True, verbose_name='Segno magazzino')),
                ('valuation_impact', models.BooleanField(default=False, verbose_name='Impatto valorizzazione')),
                ('operation_sign_valuation', models.SmallIntegerField(blank=True, choices=[(1, 'Carico / incremento'), (-1, 'Scarico / decremento')], null=True, verbose_name='Segno valorizzazione')),
                ('active', models.BooleanField(default=True, verbose_name='Attivo')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='document_types', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Tipo documento',
                'verbose_name_plural': 'Tipi documento',
                'ordering': ['code'],
                'constraints': [
                    models.UniqueConstraint(fields=('organization', 'code'), name='unique_document_type_code_per_organization'),
                    models.CheckConstraint(condition=models.Q(('operation_sign_stock__isnull', True), ('operation_sign_stock__in', [1, -1]), _connector='OR'), name='document_type_stock_sign_values'),
                    models.CheckConstraint(condition=models.Q(('operation_sign_valuation__isnull', True), ('operation_sign_valuation__in', [1, -1]), _connector='OR'), name='document_type_valuation_sign_values'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PaymentCondition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('days_to_first_due', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(365)], verbose_name='Giorni alla prima scadenza')),
                ('gap_between_dues', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(365)], verbose_name='Giorni tra le scadenze')),
                ('number_of_dues', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(24)], verbose_name='Numero rate')),
                ('is_end_of_month', models.BooleanField(default=False, verbose_name='Fine mese')),
                ('active', models.BooleanField(default=True, verbose_name='Attivo')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payment_conditions', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Condizione di pagamento',
                'verbose_name_plural': 'Condizioni di pagamento',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(max_length=50, verbose_name='Numero')),
                ('date', models.DateField(verbose_name='Data')),
                ('net_total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, verbose_name='Imponibile')),
                ('vat_total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, verbose_name='IVA')),
                ('gross_total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, verbose_name='Totale')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Note')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('document_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='documents', to='ledgerman.documenttypeconfig', verbose_name='Tipo documento')),
                ('entity', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='documents', to='ledgerman.entity', verbose_name='Anagrafica')),
                ('main_warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='ledgerman.warehouse', verbose_name='Magazzino principale')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='ledgerman.organization', verbose_name='Organizzazione')),
                ('payment_condition', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='documents', to='ledgerman.paymentcondition', verbose_name='Condizione di pagamento')),
            ],
            options={
                'verbose_name': 'Documento',
                'verbose_name_plural': 'Documenti',
                'ordering': ['-date', '-id'],
                'indexes': [models.Index(fields=['organization', 'date'], name='ledgerman_doc_org_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='DocumentLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('description', models.CharField(blank=True, default='', max_length=255, verbose_name='Descrizione')),
                ('quantity', models.DecimalField(decimal_places=4, max_digits=18, verbose_name='Quantità')),
                ('unit_price', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=14, verbose_name='Prezzo unitario')),
                ('vat_rate', models.DecimalField(decimal_places=4, default=Decimal('0'), help_text='Frazione: 0.22 per 22%', max_digits=5, verbose_name='Aliquota IVA')),
                ('net_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('vat_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('gross_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14)),
                ('document', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='ledgerman.document', verbose_name='Documento')),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='ledgerman.product', verbose_name='Prodotto')),
                ('warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='ledgerman.warehouse', verbose_name='Magazzino')),
            ],
            options={
                'verbose_name': 'Riga documento',
                'verbose_name_plural': 'Righe documento',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='StockMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=4, help_text='Positivo = carico, Negativo = scarico', max_digits=18, verbose_name='Quantità')),
                ('category', models.CharField(choices=[('supplier_receipt', 'Carico fornitore'), ('customer_return', 'Reso cliente'), ('supplier_return', 'Reso a fornitore'), ('delivery_issue', 'Scarico DDT'), ('sales_issue', 'Scarico vendita')], max_length=30, verbose_name='Tipo movimento')),
                ('source_document_number', models.CharField(blank=True, db_index=True, default='', max_length=50, verbose_name='Numero documento')),
                ('reason', models.CharField(blank=True, default='', max_length=255, verbose_name='Causale')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Ora')),
                ('document_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='ledgerman.documenttypeconfig', verbose_name='Tipo documento')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='ledgerman.organization', verbose_name='Organizzazione')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='ledgerman.product', verbose_name='Prodotto')),
                ('source_document', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='ledgerman.document', verbose_name='Documento origine')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='ledgerman.warehouse', verbose_name='Magazzino')),
            ],
            options={
                'verbose_name': 'Movimento di magazzino',
                'verbose_name_plural': 'Movimenti di magazzino',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['organization', 'product'], name='ledgerman_mov_org_prod_idx'),
                    models.Index(fields=['organization', 'product', 'warehouse'], name='ledgerman_mov_org_prod_wh_idx'),
                    models.Index(fields=['source_document'], name='ledgerman_mov_source_doc_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Installment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sequence_number', models.PositiveSmallIntegerField(verbose_name='Rata')),
                ('due_date', models.DateField(db_index=True, verbose_name='Scadenza')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Importo')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('document', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='installments', to='ledgerman.document', verbose_name='Documento')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='installments', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Scadenza',
                'verbose_name_plural': 'Scadenze',
                'ordering': ['due_date', 'sequence_number'],
                'constraints': [models.UniqueConstraint(fields=('document', 'sequence_number'), name='unique_installment_sequence_per_document')],
            },
        ),
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Importo')),
                ('date', models.DateField(verbose_name='Data')),
                ('direction', models.CharField(choices=[('inflow', 'Entrata'), ('outflow', 'Uscita')], max_length=10, verbose_name='Direzione')),
                ('reference', models.CharField(blank=True, default='', max_length=100, verbose_name='Riferimento')),
                ('notes', models.CharField(blank=True, default='', max_length=500, verbose_name='Note')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='ledgerman.organization', verbose_name='Organizzazione')),
            ],
            options={
                'verbose_name': 'Pagamento',
                'verbose_name_plural': 'Pagamenti',
                'ordering': ['-date', '-id'],
                'indexes': [models.Index(fields=['organization', 'date'], name='ledgerman_pay_org_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='PaymentAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Importo')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('installment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='ledgerman.installment', verbose_name='Scadenza')),
                ('payment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='ledgerman.payment', verbose_name='Pagamento')),
            ],
            options={
                'verbose_name': 'Allocazione pagamento',
                'verbose_name_plural': 'Allocazioni pagamento',
                'constraints': [models.UniqueConstraint(fields=('payment', 'installment'), name='unique_allocation_per_payment_installment')],
            },
        ),
    ]
