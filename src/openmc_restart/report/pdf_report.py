"""PDF replay report generator using reportlab."""

import os
import tempfile

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Image, Table, TableStyle,
)

from . import charts

TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.Color(0.2, 0.3, 0.5)),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
    ('FONTSIZE', (0, 0), (-1, 0), 11),
    ('FONTSIZE', (0, 1), (-1, -1), 10),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.Color(0.95, 0.95, 0.95), colors.white]),
])


def generate_report(result, output_path: str, geometry=None):
    """Generate a PDF report of one particle replay.

    Args:
        result: RestartResult from the replay driver.
        output_path: Path to write the PDF file.
        geometry: Geometry drawn under the track plot, if any.
    """
    doc = SimpleDocTemplate(
        output_path, pagesize=letter,
        leftMargin=1*inch, rightMargin=1*inch,
        topMargin=1*inch, bottomMargin=1*inch,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle('CustomTitle', parent=styles['Title'], fontSize=20, spaceAfter=30)
    heading_style = ParagraphStyle('CustomHeading', parent=styles['Heading1'], fontSize=16, spaceAfter=12)
    body_style = styles['BodyText']

    record = result.record
    ctx = record.context
    p = result.particle
    elements = []

    elements.append(Paragraph(f"Particle Restart Report: particle {record.id}", title_style))

    # --- Restart context ---
    elements.append(Paragraph("1. Restart Point", heading_style))
    context_data = [
        ['Parameter', 'Value'],
        ['Run mode', record.run_mode.value],
        ['Batch', str(ctx.current_batch)],
        ['Generations per batch', str(ctx.generations_per_batch)],
        ['Generation', str(ctx.current_generation)],
        ['Particles per generation', f"{ctx.n_particles:,}"],
        ['Stream seed', str(result.seed)],
    ]
    t = Table(context_data, colWidths=[2.5*inch, 3*inch])
    t.setStyle(TABLE_STYLE)
    elements.append(t)
    elements.append(Spacer(1, 0.3*inch))

    # --- Initial vs final state ---
    elements.append(Paragraph("2. Particle State", heading_style))
    x0, y0, z0 = record.position
    state_data = [
        ['Quantity', 'Initial', 'Final'],
        ['Type', record.type.name.lower(), p.type.name.lower()],
        ['Position', f"({x0:.5g}, {y0:.5g}, {z0:.5g})",
         f"({p.r[0]:.5g}, {p.r[1]:.5g}, {p.r[2]:.5g})"],
        ['Weight', f"{record.weight:.6g}", f"{p.wgt:.6g}"],
        ['Energy (stored)', str(record.energy), f"{p.E:.6g} eV"],
        ['Events', '-', str(p.n_event)],
        ['Fate', '-', result.fate.name.lower().replace('_', ' ')],
    ]
    t = Table(state_data, colWidths=[1.5*inch, 2*inch, 2*inch])
    t.setStyle(TABLE_STYLE)
    elements.append(t)
    elements.append(Spacer(1, 0.3*inch))

    with tempfile.TemporaryDirectory() as tmpdir:
        # --- Track ---
        if p.tracks:
            elements.append(Paragraph("3. Track", heading_style))
            coords = [state[0] for state in p.tracks]
            chart_path = os.path.join(tmpdir, 'track_xy.png')
            charts.track_xy_chart(coords, chart_path, geometry=geometry)
            elements.append(Image(chart_path, width=4.5*inch, height=4.5*inch))
            elements.append(Spacer(1, 0.2*inch))

            chart_path = os.path.join(tmpdir, 'energy_history.png')
            charts.energy_history_chart([state[1] for state in p.tracks], chart_path)
            elements.append(Image(chart_path, width=5.5*inch, height=2.75*inch))
        else:
            elements.append(Paragraph(
                "No track was recorded for this replay. Rerun with track output "
                "enabled to include the particle's path.",
                body_style
            ))

        doc.build(elements)
    return output_path
