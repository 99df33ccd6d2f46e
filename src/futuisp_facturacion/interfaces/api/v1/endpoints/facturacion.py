"""Endpoints de facturación automática."""
from datetime import date

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query

from futuisp_facturacion.application.services.orquestador_facturacion import (
    OrquestadorFacturacion,
)
from futuisp_facturacion.application.use_cases.ejecutar_facturacion import EjecutarFacturacion
from futuisp_facturacion.application.use_cases.fecha_referencia import resolver_fecha_referencia
from futuisp_facturacion.application.use_cases.previsualizar_factura_cliente import (
    PrevisualizarFacturaCliente,
)
from futuisp_facturacion.application.use_cases.previsualizar_facturacion import (
    PrevisualizarFacturacion,
)
from futuisp_facturacion.domain.value_objects.contexto_facturacion import ParametrosFacturacion
from futuisp_facturacion.infrastructure.cache.redis_cache import redis_cache
from futuisp_facturacion.infrastructure.config.logging import logger
from futuisp_facturacion.infrastructure.config.settings import get_settings
from futuisp_facturacion.infrastructure.database.connection import db_manager
from futuisp_facturacion.infrastructure.database.repositories.concepto_repository_impl import (
    ConceptoRepositoryImpl,
)
from futuisp_facturacion.infrastructure.database.repositories.configuracion_impuestos_provider_impl import (
    ConfiguracionImpuestosProviderImpl,
)
from futuisp_facturacion.infrastructure.database.repositories.factura_repository_impl import (
    FacturaRepositoryImpl,
)
from futuisp_facturacion.infrastructure.database.repositories.secuencia_provider_impl import (
    SecuenciaProviderImpl,
)
from futuisp_facturacion.infrastructure.database.repositories.servicio_cliente_repository_impl import (
    ServicioClienteRepositoryImpl,
)
from futuisp_facturacion.interfaces.api.v1.schemas import (
    EjecutarFacturacionRequest,
    PreviewClienteResponse,
    ResultadoCorridaResponse,
)
from futuisp_facturacion.interfaces.api.v1.schemas.requests import PATRON_PERIODO

router = APIRouter(prefix="/facturacion", tags=["Facturación"])

CACHE_PREVIEW = "facturacion:preview"


def get_orquestador() -> OrquestadorFacturacion:
    """Dependency: orquestador con repositorios MySQL y parámetros de settings."""
    settings = get_settings()
    return OrquestadorFacturacion(
        servicios_repo=ServicioClienteRepositoryImpl(db_manager),
        conceptos_repo=ConceptoRepositoryImpl(db_manager),
        facturas_repo=FacturaRepositoryImpl(db_manager, SecuenciaProviderImpl(db_manager)),
        impuestos=ConfiguracionImpuestosProviderImpl(
            db_manager,
            porcentaje_iva_defecto=settings.facturacion_porcentaje_iva,
            porcentaje_interes_defecto=settings.facturacion_porcentaje_interes,
        ),
        parametros=ParametrosFacturacion(
            prefijo=settings.facturacion_prefijo,
            valor_instalacion=settings.facturacion_valor_instalacion,
            instalacion_aplica_iva=settings.facturacion_instalacion_aplica_iva,
            dias_vencimiento=settings.facturacion_dias_vencimiento,
            dias_mora_interes=settings.facturacion_dias_mora_interes,
        ),
        max_workers=settings.facturacion_max_workers,
        timeout_cliente=settings.facturacion_timeout_cliente,
    )


def _fecha_referencia(periodo: str | None, fecha: date | None = None) -> date:
    try:
        return resolver_fecha_referencia(periodo=periodo, fecha_referencia=fecha)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/preview", response_model=ResultadoCorridaResponse)
async def previsualizar_facturacion(
    periodo: str | None = Query(
        None,
        pattern=PATRON_PERIODO,
        description="Mes a previsualizar (YYYY-MM). Por defecto: hoy",
        examples=["2025-04"],
    ),
    orquestador: OrquestadorFacturacion = Depends(get_orquestador),
):
    """
    Calcula las facturas de todos los clientes activos sin guardarlas.

    Misma lógica que la ejecución: período, prorrateo, IVA por estrato,
    conceptos pendientes e intereses de mora.
    """
    fecha = _fecha_referencia(periodo)

    cache_key = f"{CACHE_PREVIEW}:{fecha.isoformat()}"
    cached = await redis_cache.get(cache_key)
    if cached:
        return cached

    try:
        resultado = await PrevisualizarFacturacion(orquestador).execute(fecha)
    except Exception as e:
        logger.error(f"Error en preview de facturación: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error en preview: {e}")

    await redis_cache.set(cache_key, resultado, ttl=get_settings().redis_ttl_preview)
    return resultado


@router.post("/ejecutar", response_model=ResultadoCorridaResponse)
async def ejecutar_facturacion(
    solicitud: EjecutarFacturacionRequest | None = Body(None),
    orquestador: OrquestadorFacturacion = Depends(get_orquestador),
):
    """
    Genera y guarda las facturas del período.

    Siempre responde 200 con contadores; los errores por cliente van en
    `errores` y los clientes ya facturados en `omisiones`.
    """
    solicitud = solicitud or EjecutarFacturacionRequest()
    fecha = _fecha_referencia(solicitud.periodo, solicitud.fecha_referencia)

    try:
        resultado = await EjecutarFacturacion(orquestador).execute(fecha)
    except Exception as e:
        logger.error(f"Error ejecutando facturación: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error en facturación: {e}")

    # Los previews guardados ya no reflejan lo facturado
    await redis_cache.clear_pattern(f"{CACHE_PREVIEW}:*")

    return resultado


@router.get("/preview/{cliente_id}", response_model=PreviewClienteResponse)
async def previsualizar_factura_cliente(
    cliente_id: int = Path(..., ge=1, description="ID del cliente"),
    periodo: str | None = Query(None, pattern=PATRON_PERIODO, description="Mes (YYYY-MM)"),
    orquestador: OrquestadorFacturacion = Depends(get_orquestador),
):
    """Preview de la factura de un cliente."""
    fecha = _fecha_referencia(periodo)

    resultado = await PrevisualizarFacturaCliente(orquestador).execute(cliente_id, fecha)

    if resultado is None:
        raise HTTPException(
            status_code=404,
            detail=f"Cliente {cliente_id} no encontrado o sin servicios activos",
        )

    if resultado["incidencia"] is not None:
        raise HTTPException(status_code=422, detail=resultado["incidencia"])

    return resultado
