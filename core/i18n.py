"""
Translations for Soisy event messages.

Soisy notifications carry a short English description of the event
(``eventMessage``, spaces sent as ``%20``). Those descriptions are the
catalog keys below.
"""

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "loan approved": "The applicant has passed the automatic pre-approval of Soisy systems and is continuing to enter their data.",
        "waiting for verification": "The applicant has completed the application process and is now awaiting checks by Soisy operators.",
        "waiting for disbursement": "The installment payment request has been approved by an operator. The payment will be funded.",
        "payment received": "The installment payment request is financed permanently.",
        "payment failed": "Request for pre-approval of the installment payment was refused by Soisy automatic systems.",
        "documents check KO": "Soisy, after the appropriate checks, refused the customer data or documents.",
    },
    "it": {
        "loan approved": "Il richiedente ha superato la pre-approvazione automatica dei sistemi di Soisy e sta proseguendo con la immissione dei propri dati.",
        "waiting for verification": "Il richiedente ha completato il processo di richiesta e ora sta attendendo le verifiche in capo agli operatori di Soisy.",
        "waiting for disbursement": "La richiesta di pagamento rateale è stata approvata da un operatore. Il pagamento verrà finanziato.",
        "payment received": "La richiesta di pagamento rateale viene finanziata definitivamente.",
        "payment failed": "La richiesta di pre-approvazione del pagamento rateale è stata rifiutata dai sistemi automatici di Soisy.",
        "documents check KO": "Soisy, dopo le opportune verifiche, ha rifiutato i dati o i documenti relativi al cliente.",
    },
}

# Catalog key used when a notification arrives without an eventMessage.
EVENT_MESSAGE_KEYS = {
    "LoanWasApproved": "loan approved",
    "RequestCompleted": "waiting for verification",
    "LoanWasVerified": "waiting for disbursement",
    "LoanWasDisbursed": "payment received",
    "UserWasRejected": "payment failed",
}


def translate(key: str, locale: str = DEFAULT_LOCALE) -> str:
    """Return the translated message, or the key itself when there is none."""
    catalog = MESSAGES.get(locale) or MESSAGES[DEFAULT_LOCALE]
    return catalog.get(key, key)


def translate_event_message(
    event_message: str | None,
    event_id: str | None = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    if event_message:
        key = event_message.replace("%20", " ")
    else:
        key = EVENT_MESSAGE_KEYS.get(event_id or "", event_id or "")
    return translate(key, locale)
