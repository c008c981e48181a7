import dataclasses
from html import escape

import db
import printing


def test_receipt_contains_payment_details():
    state = db.init_state()
    payment = state.payments[0]
    html_doc = printing.payment_receipt_html(payment, "Ahmed", "Auto-école Najah", "fr", printed_on="2024-07-01")
    assert 'dir="ltr"' in html_doc
    assert "Reçu de paiement" in html_doc
    assert "Ahmed" in html_doc
    assert "1\u202f500 MAD" in html_doc
    assert "15/01/2023" in html_doc
    assert "01/07/2024" in html_doc


def test_receipt_for_deleted_student_prints_unknown():
    payment = db.init_state().payments[0]
    html_doc = printing.payment_receipt_html(payment, None, "School", "ar", printed_on="2024-07-01")
    assert 'dir="rtl"' in html_doc
    assert "غير معروف" in html_doc


def test_receipt_escapes_text():
    payment = dataclasses.replace(db.init_state().payments[0], description="<b>cash</b>")
    html_doc = printing.payment_receipt_html(payment, "A & B", "School", "fr", printed_on="2024-07-01")
    assert "&lt;b&gt;cash&lt;/b&gt;" in html_doc
    assert "A &amp; B" in html_doc


def test_student_file_financial_section():
    state = db.init_state()
    student = state.students[0]
    html_doc = printing.student_file_html(student, state.payments, "fr")
    assert escape("Dossier de l'élève") in html_doc
    assert "3\u202f500 MAD" in html_doc
    assert "0 MAD" in html_doc
    assert "cin_ahmed.pdf" in html_doc
    assert "Réussi" in html_doc


def test_student_file_without_documents():
    state = db.init_state()
    html_doc = printing.student_file_html(state.students[1], state.payments, "ar")
    assert "لا توجد وثائق مرفقة." in html_doc
    assert "2,000 درهم" in html_doc


def test_with_print_script():
    out = printing.with_print_script("<html><body>x</body></html>")
    assert "window.print()" in out
    assert out.endswith("</body></html>")
