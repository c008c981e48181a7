"""
printing.py
Standalone printable HTML documents: payment receipt and student file.
"""

from __future__ import annotations

from html import escape

from i18n import direction, t
from utils import balance, format_date, format_money, today_iso, total_paid

_RECEIPT_CSS = """
body { font-family: 'Cairo', sans-serif; direction: %(dir)s; text-align: %(align)s; padding: 20px; background-color: #f9f9f9; }
.receipt-container { border: 1px solid #ddd; padding: 30px; max-width: 600px; margin: auto; background-color: white; border-radius: 8px; }
h1 { text-align: center; color: #333; border-bottom: 2px solid #eee; padding-bottom: 15px; margin-bottom: 20px; }
p { margin: 12px 0; font-size: 16px; }
.details { margin-top: 25px; line-height: 1.8; }
.footer { margin-top: 40px; text-align: center; font-size: 12px; color: #777; }
"""

_STUDENT_CSS = """
body { font-family: 'Cairo', sans-serif; direction: %(dir)s; text-align: %(align)s; padding: 20px; }
.container { border: 1px solid #ccc; padding: 20px; max-width: 800px; margin: auto; }
h1 { text-align: center; border-bottom: 2px solid #333; padding-bottom: 10px; }
table { width: 100%%; border-collapse: collapse; margin-top: 20px; }
th, td { border: 1px solid #ddd; padding: 10px; text-align: %(align)s; }
th { background-color: #f2f2f2; }
.section-title { font-weight: bold; font-size: 1.2em; margin-top: 25px; border-bottom: 1px solid #eee; padding-bottom: 5px; }
"""


def _page(title: str, css: str, body: str, lang: str) -> str:
    d = direction(lang)
    align = "right" if d == "rtl" else "left"
    return (
        f'<html lang="{lang}" dir="{d}">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        '<link href="https://fonts.googleapis.com/css2?family=Cairo:wght@400;600;700&display=swap" rel="stylesheet">\n'
        f"<style>{css % {'dir': d, 'align': align}}</style>\n"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def _row(label_key: str, value: str, lang: str) -> str:
    return f"<tr><th>{escape(t(label_key, lang))}</th><td>{escape(value)}</td></tr>"


def payment_receipt_html(payment, student_name: str | None, school_name: str, lang: str, printed_on: str | None = None) -> str:
    """
    Receipt for one payment. A missing student (deleted record) prints as "unknown".
    """
    payer = student_name or t("unknown", lang)
    printed_on = printed_on or today_iso()
    body = f"""<div class="receipt-container">
<h1>{escape(t("payment_receipt", lang))}</h1>
<p><strong>{escape(t("school_name", lang))}:</strong> {escape(school_name)}</p>
<p><strong>{escape(t("print_date", lang))}:</strong> {format_date(printed_on, lang)}</p>
<hr/>
<div class="details">
<p><strong>{escape(t("received_from", lang))}:</strong> {escape(payer)}</p>
<p><strong>{escape(t("amount_of", lang))}:</strong> {escape(format_money(payment.amount, lang))}</p>
<p><strong>{escape(t("for_reason", lang))}:</strong> {escape(payment.description)}</p>
<p><strong>{escape(t("on_date", lang))}:</strong> {format_date(payment.date, lang)}</p>
</div>
<div class="footer">{escape(t("receipt_footer", lang))}</div>
</div>"""
    return _page(t("payment_receipt", lang), _RECEIPT_CSS, body, lang)


def student_file_html(student, payments, lang: str) -> str:
    paid = total_paid(student.id, payments)
    remaining = balance(student, payments)

    if student.documents:
        doc_rows = "\n".join(
            f"<tr><td>{escape(d.name)}</td><td>{escape(d.file_name)}</td><td>{format_date(d.upload_date, lang)}</td></tr>"
            for d in student.documents
        )
    else:
        doc_rows = f'<tr><td colspan="3">{escape(t("no_documents_attached", lang))}</td></tr>'

    body = f"""<div class="container">
<h1>{escape(t("student_file", lang))}</h1>
<div class="section-title">{escape(t("personal_information", lang))}</div>
<table>
{_row("full_name", student.name, lang)}
{_row("address", student.address, lang)}
{_row("phone_number", student.phone, lang)}
{_row("national_id", student.national_id, lang)}
</table>
<div class="section-title">{escape(t("training_information", lang))}</div>
<table>
{_row("license_type", student.license_type, lang)}
{_row("registration_date", format_date(student.registration_date, lang), lang)}
{_row("status", t(f"student_status_{student.status}", lang), lang)}
</table>
<div class="section-title">{escape(t("financial_status", lang))}</div>
<table>
{_row("total_cost", format_money(student.total_training_cost, lang), lang)}
{_row("amount_paid", format_money(paid, lang), lang)}
{_row("remaining_balance", format_money(remaining, lang), lang)}
</table>
<div class="section-title">{escape(t("attached_documents", lang))}</div>
<table>
<thead><tr><th>{escape(t("document_name", lang))}</th><th>{escape(t("file_name", lang))}</th><th>{escape(t("upload_date", lang))}</th></tr></thead>
<tbody>
{doc_rows}
</tbody>
</table>
</div>"""
    return _page(f"{t('student_file', lang)}: {student.name}", _STUDENT_CSS, body, lang)


def with_print_script(html_doc: str) -> str:
    """Append a script that opens the browser print dialog once the document loads."""
    return html_doc.replace("</body>", "<script>window.onload = function () { window.print(); };</script>\n</body>")
