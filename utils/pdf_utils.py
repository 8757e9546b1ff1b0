import io
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from PIL import Image

from utils.decision import DecisionOutcome


def create_pdf(app_name, scenario, summary, fig_outcomes=None):
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    width, height = letter
    y_pos = height - inch

    def new_page_if_needed(y_pos, needed):
        if y_pos - needed < 0.75 * inch:
            c.showPage()
            return height - inch
        return y_pos

    # Title
    c.setFont("Helvetica-Bold", 16)
    c.drawString(1 * inch, y_pos, app_name)
    y_pos -= 0.5 * inch

    # Scenario inputs
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y_pos, "Scenario")
    y_pos -= 0.3 * inch
    c.setFont("Helvetica", 10)
    for key, value in scenario.to_dict().items():
        c.drawString(1.2 * inch, y_pos, f"{key}: {value}")
        y_pos -= 0.2 * inch
    y_pos -= 0.2 * inch

    # Outcome table
    y_pos = new_page_if_needed(y_pos, 2.5 * inch)
    c.setFont("Helvetica-Bold", 12)
    status = " (partial)" if summary.partial else ""
    c.drawString(1 * inch, y_pos, f"Recommendation probabilities, {summary.completed:,} replications{status}")
    y_pos -= 0.3 * inch
    c.setFont("Helvetica", 10)
    probs = summary.probabilities
    ses = summary.standard_errors
    for outcome in DecisionOutcome:
        c.drawString(1.2 * inch, y_pos, outcome.label)
        c.drawRightString(6.5 * inch, y_pos, f"{probs[outcome]:.4f}  (SE {ses[outcome]:.4f})")
        y_pos -= 0.22 * inch
    y_pos -= 0.1 * inch
    c.setFont("Helvetica-Bold", 10)
    c.drawString(1.2 * inch, y_pos, "Any go recommendation")
    c.drawRightString(6.5 * inch, y_pos, f"{summary.go_probability:.4f}")
    y_pos -= 0.4 * inch

    # Chart
    if fig_outcomes is not None:
        max_height = 3 * inch
        y_pos = new_page_if_needed(y_pos, max_height)
        buf_img = io.BytesIO()
        fig_outcomes.savefig(buf_img, format='png', bbox_inches='tight')
        buf_img.seek(0)
        pil_img = Image.open(buf_img)
        c.drawImage(ImageReader(pil_img), 1 * inch, y_pos - max_height, width=6 * inch,
                    height=max_height, preserveAspectRatio=True, mask='auto')
        pil_img.close()
        buf_img.close()

    # Footer
    c.setFont("Helvetica-Oblique", 8)
    c.drawString(1 * inch, 0.5 * inch, f"Seed {summary.seed}. For research and planning use only.")

    c.showPage()
    c.save()
    pdf_bytes = buf.getvalue()
    buf.close()
    return pdf_bytes
