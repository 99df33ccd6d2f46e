"""Servicio de dominio para cálculo de IVA."""
from decimal import ROUND_HALF_UP, Decimal

from futuisp_facturacion.domain.entities.factura import LineaBase
from futuisp_facturacion.domain.exceptions import TasaImpuestoInvalida
from futuisp_facturacion.domain.value_objects.contexto_facturacion import TasasImpuesto
from futuisp_facturacion.domain.value_objects.tipos import CategoriaConcepto, TipoLinea

# Pesos colombianos: sin decimales
UNIDAD_MONEDA = Decimal("1")
CERO = Decimal("0")


class CalculadoraIVA:
    """
    Calcula el IVA de una línea según tipo de servicio y estrato.

    Reglas de negocio:
    - Internet estratos 1, 2, 3: sin IVA
    - Internet estratos 4, 5, 6: IVA configurado
    - Televisión y combos: siempre IVA configurado
    - Instalación: IVA configurado si la configuración lo indica
    - Conceptos: solo si el concepto tiene aplica_iva, con su propio porcentaje
    - Publicidad, descuentos e intereses: nunca llevan IVA
    - Intereses de mora: sin IVA
    """

    ESTRATO_MAXIMO_EXENTO = 3
    ESTRATO_POR_DEFECTO = 3
    CATEGORIAS_EXENTAS = (
        CategoriaConcepto.PUBLICIDAD,
        CategoriaConcepto.DESCUENTO,
        CategoriaConcepto.INTERES,
    )

    @staticmethod
    def redondear(valor: Decimal) -> Decimal:
        """Redondeo half-up a la unidad de moneda."""
        return valor.quantize(UNIDAD_MONEDA, rounding=ROUND_HALF_UP)

    @staticmethod
    def validar_porcentaje(porcentaje: Decimal) -> Decimal:
        porcentaje = Decimal(porcentaje)
        if porcentaje < 0 or porcentaje > 100:
            raise TasaImpuestoInvalida(f"Porcentaje de impuesto inválido: {porcentaje}")
        return porcentaje

    @staticmethod
    def validar_tasas(tasas: TasasImpuesto) -> TasasImpuesto:
        """Valida las tasas configuradas antes de facturar a cualquier cliente."""
        CalculadoraIVA.validar_porcentaje(tasas.porcentaje_iva)
        CalculadoraIVA.validar_porcentaje(tasas.porcentaje_interes)
        return tasas

    @staticmethod
    def porcentaje_aplicable(
        tipo: TipoLinea,
        porcentaje_configurado: Decimal,
        estrato: int | None = None,
        aplica_iva: bool = False,
        porcentaje_concepto: Decimal | None = None,
        categoria: CategoriaConcepto | None = None,
    ) -> Decimal:
        """
        Determina el porcentaje de IVA que corresponde a una línea.

        Args:
            tipo: Tipo de línea
            porcentaje_configurado: IVA general de la empresa (ej: 19)
            estrato: Estrato del cliente (servicios)
            aplica_iva: Bandera del concepto o de la instalación
            porcentaje_concepto: Porcentaje propio del concepto
            categoria: Categoría del concepto, si aplica

        Returns:
            Porcentaje aplicable (0 si está exento)
        """
        if tipo == TipoLinea.INTERNET:
            estrato = estrato or CalculadoraIVA.ESTRATO_POR_DEFECTO
            if estrato <= CalculadoraIVA.ESTRATO_MAXIMO_EXENTO:
                return CERO
            return CalculadoraIVA.validar_porcentaje(porcentaje_configurado)

        if tipo in (TipoLinea.TELEVISION, TipoLinea.COMBO):
            return CalculadoraIVA.validar_porcentaje(porcentaje_configurado)

        if tipo == TipoLinea.INSTALACION:
            if not aplica_iva:
                return CERO
            return CalculadoraIVA.validar_porcentaje(porcentaje_configurado)

        if tipo == TipoLinea.CONCEPTO:
            if not aplica_iva or categoria in CalculadoraIVA.CATEGORIAS_EXENTAS:
                return CERO
            return CalculadoraIVA.validar_porcentaje(
                porcentaje_concepto if porcentaje_concepto is not None else CERO
            )

        # Intereses de mora
        return CERO

    @staticmethod
    def calcular(base: Decimal, porcentaje: Decimal) -> Decimal:
        """IVA redondeado de una base."""
        if porcentaje == 0:
            return CERO
        return CalculadoraIVA.redondear(base * porcentaje / Decimal(100))

    @staticmethod
    def calcular_linea(linea: LineaBase, porcentaje_configurado: Decimal) -> tuple[Decimal, Decimal]:
        """
        Calcula el IVA de una línea del agregador.

        Returns:
            Tupla (valor_iva, porcentaje_aplicado)
        """
        porcentaje = CalculadoraIVA.porcentaje_aplicable(
            tipo=linea.tipo,
            porcentaje_configurado=porcentaje_configurado,
            estrato=linea.estrato,
            aplica_iva=linea.aplica_iva,
            porcentaje_concepto=linea.porcentaje_iva,
            categoria=linea.categoria,
        )
        return CalculadoraIVA.calcular(linea.base, porcentaje), porcentaje
