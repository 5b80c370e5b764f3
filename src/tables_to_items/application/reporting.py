"""User-facing reporting of conversion outcomes."""

from __future__ import annotations

from tables_to_items.application.ports import Localizer, Notifier
from tables_to_items.application.results import ConversionResult
from tables_to_items.messages import MessageCatalog


def report_conversion(
    result: ConversionResult,
    notifier: Notifier,
    localizer: Localizer | None = None,
) -> bool:
    """Notify the user about a finished conversion and return its success flag.

    A successful batch reports the created count; a failed one reports every
    collected error in a single message.
    """
    messages = localizer or MessageCatalog()
    if result.success:
        notifier.info(messages.format("conversion-complete", count=result.items_created))
    else:
        notifier.error(
            f"{messages.localize('conversion-failed')}: {', '.join(result.errors)}"
        )
    return result.success
