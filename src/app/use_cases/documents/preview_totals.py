"""PreviewDocumentTotals Use Case

Recomputes line amounts and document totals while a form is being filled in.
Input is taken as typed: empty or non-numeric values count as zero and
nothing is validated.
"""

from libs.result import Result, Return
from src.domain.pricing import aggregate, coerce_decimal, compute_line_total
from .dtos import PreviewLineDTO, PreviewTotalsCommandDTO, PreviewTotalsResponseDTO


class PreviewDocumentTotals:
    """Use Case: Live totals for a document form"""

    async def execute(self, command: PreviewTotalsCommandDTO) -> Result[PreviewTotalsResponseDTO]:
        line_dtos = []
        amounts = []

        for position, item in enumerate(command.items, start=1):
            line_amounts = compute_line_total(
                coerce_decimal(item.quantity),
                coerce_decimal(item.unit_price),
                coerce_decimal(item.discount_percentage),
                coerce_decimal(item.tax_percentage),
            )
            amounts.append(line_amounts)
            line_dtos.append(
                PreviewLineDTO(
                    position=position,
                    product_id=item.product_id,
                    product_specification_id=item.product_specification_id,
                    **line_amounts.model_dump(),
                )
            )

        totals = aggregate(amounts)
        return Return.ok(
            PreviewTotalsResponseDTO(lines=line_dtos, **totals.model_dump())
        )
