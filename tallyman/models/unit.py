"""
UnitOfMeasure model — base and pack units.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from tallyman.models.enums import UnitKind


class UnitOfMeasure(models.Model):
    """
    Unit a line item can be counted in.

    A base unit has factor 1. A pack unit points to exactly one base unit
    and says how many of it are inside one pack. Pack-of-pack chains are
    not allowed: ``base_unit`` must itself be a base unit.

    Examples:
        un = UnitOfMeasure.objects.create(name='Unidade', short_name='un')
        UnitOfMeasure.objects.create(
            name='Caixa', short_name='cx', kind=UnitKind.PACK,
            base_unit=un, units_per_pack=12,
        )
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_('Nome'),
        help_text=_('Ex: Unidade, Caixa'),
    )
    short_name = models.CharField(
        max_length=20,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Abreviação'),
        help_text=_('Ex: un, cx'),
    )
    kind = models.CharField(
        max_length=10,
        choices=UnitKind.choices,
        default=UnitKind.BASE,
        db_index=True,
        verbose_name=_('Tipo'),
    )
    is_active = models.BooleanField(default=True, verbose_name=_('Ativo'))

    # Pack units only
    base_unit = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='packs',
        limit_choices_to={'kind': UnitKind.BASE},
        verbose_name=_('Unidade base'),
    )
    units_per_pack = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Unidades por embalagem'),
        help_text=_('Quantidade de unidades base em uma embalagem'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Unidade de Medida')
        verbose_name_plural = _('Unidades de Medida')
        ordering = ['name']

    def clean(self):
        if self.kind == UnitKind.PACK:
            errors = {}
            if self.pk is not None and self.packs.exists():
                errors['kind'] = _('Unidade usada como base por embalagens não pode virar embalagem.')
            if self.base_unit_id is None:
                errors['base_unit'] = _('Embalagens exigem uma unidade base.')
            elif self.pk is not None and self.base_unit_id == self.pk:
                errors['base_unit'] = _('Uma embalagem não pode ser a própria unidade base.')
            elif self.base_unit.kind != UnitKind.BASE:
                errors['base_unit'] = _('A unidade base não pode ser outra embalagem.')
            if not self.units_per_pack:
                errors['units_per_pack'] = _('Embalagens exigem unidades por embalagem (> 0).')
            if errors:
                raise ValidationError(errors)
        else:
            # Base units carry no conversion
            self.base_unit = None
            self.units_per_pack = None

    @property
    def factor(self) -> int:
        """Base units contained in one of this unit."""
        if self.kind == UnitKind.PACK and self.units_per_pack:
            return self.units_per_pack
        return 1

    def __str__(self) -> str:
        if self.kind == UnitKind.PACK:
            return f"{self.name} ({self.units_per_pack}x {self.base_unit})"
        return self.name
