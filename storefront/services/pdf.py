# Filename: storefront/services/pdf.py
# Order receipt as a PDF under a public folder; returns (path, filename) so a URL can be built.

import os

from fpdf import FPDF

from storefront.models import Order


def _latin1(text: str) -> str:
    # core PDF fonts only cover latin-1
    return text.encode("latin-1", "replace").decode("latin-1")


def receipt_text(order: Order) -> str:
    lines = [f"Order {order.id}", f"Date: {order.created_at:%Y-%m-%d %H:%M} UTC", ""]
    for it in order.items:
        lines.append(
            f"{it.name} (size {it.selected_size:g}) x{it.quantity} @ {it.price:.2f} = {it.price * it.quantity:.2f}"
        )
    shipping = "Free" if order.totals.shipping == 0 else f"{order.totals.shipping:.2f}"
    lines += [
        "",
        f"Subtotal: {order.totals.subtotal:.2f}",
        f"Shipping: {shipping}",
        f"Total: KSh {order.totals.total:.2f}",
        f"Paid via: {'M-Pesa ' + order.phone if order.phone else order.method.value}",
    ]
    return "\n".join(lines)


def generate_receipt_pdf(order: Order, out_dir: str = ".") -> tuple[str, str]:
    os.makedirs(out_dir, exist_ok=True)

    class PDF(FPDF):
        def header(self):
            self.set_font("Helvetica", "B", 15)
            self.cell(80)
            self.cell(30, 10, "Receipt", border=1, align="C")
            self.ln(20)

    pdf = PDF()
    pdf.add_page()
    pdf.set_font("Helvetica", size=12)
    pdf.multi_cell(0, 10, _latin1(receipt_text(order)))
    filename = f"receipt-{order.id}.pdf"
    file_path = os.path.join(out_dir, filename)
    pdf.output(file_path)
    return file_path, filename
