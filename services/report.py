"""Report-facing data derived from a computed cooling run.

These helpers produce text values only; page layout and charts belong to
the presentation layer.
"""

from __future__ import annotations

from typing import List, Tuple

from models.records import CoolingResult
from services.formatting import format_decimal


def _time_part(timestamp: str) -> str:
    return timestamp.split(" ", 1)[-1]


def summary_rows(result: CoolingResult) -> List[Tuple[str, str]]:
    """Label/value pairs for the report header table."""
    params = result.params
    return [
        ("Data", params.run_date.strftime("%d/%m/%Y")),
        ("Início", params.start_clock.strftime("%H:%M")),
        ("Fim", params.end_clock.strftime("%H:%M")),
        ("Intervalo Total (min)", str(result.total_minutes)),
        ("Produto Analisado", params.product),
        (
            "Temperatura (Máx/Mín/Méd)",
            " / ".join(
                f"{format_decimal(value)} ºC"
                for value in (
                    result.temperature_max,
                    result.temperature_min,
                    result.temperature_mean,
                )
            ),
        ),
        (
            "Umidade Relativa [%Hr] (Máx/Mín/Méd)",
            " / ".join(
                format_decimal(value)
                for value in (result.humidity_max, result.humidity_min, result.humidity_mean)
            ),
        ),
        ("Taxa média de resfriamento", f"{format_decimal(result.mean_linear_rate, 5)} ºC/min"),
        ("Constante Newtoniana (k global)", f"{format_decimal(result.global_rate_constant, 4)} min-¹"),
    ]


def closing_observation(result: CoolingResult) -> str:
    first = result.data_points[0]
    last = result.data_points[-1]
    return (
        f"Processo iniciado às {_time_part(first.timestamp)}. "
        f"Registro finalizado ao atingir {format_decimal(last.observed_temp)} ºC "
        f"às {_time_part(last.timestamp)}."
    )


def build_analysis_prompt(result: CoolingResult) -> str:
    """Prompt text for the external narrative service.

    Only scalar aggregates and input parameters are interpolated; the
    generated commentary never flows back into the computation.
    """
    params = result.params
    lines = [
        "Aja como um especialista em segurança alimentar e processos térmicos.",
        "Analise os seguintes dados de resfriamento industrial para o produto "
        f"{params.product or 'não informado'}:",
        f"- Temperatura Inicial: {format_decimal(params.initial_temp)} °C",
        f"- Temperatura Final: {format_decimal(params.final_temp)} °C",
        f"- Tempo total: {result.total_minutes} minutos",
        f"- Taxa média de resfriamento: {format_decimal(result.mean_linear_rate, 4)} °C/min",
        "- Constante de resfriamento de Newton (k global): "
        f"{format_decimal(result.global_rate_constant, 4)} min-¹",
        f"- Objetivo de monitoramento: {params.objective or 'não informado'}",
        "",
        "Forneça um breve resumo técnico (máximo 3 parágrafos curtos) avaliando a "
        "eficiência do processo.",
        "Mencione se a queda de temperatura parece adequada para evitar proliferação "
        "bacteriana e se o processo está sob controle.",
        "Use um tom profissional e direto ao ponto.",
    ]
    return "\n".join(lines)
