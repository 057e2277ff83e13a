"""Quote preview (HTML) and download (PDF).

Both outputs go through the same gate: an unapproved quote is only rendered
for an admin.
"""
from io import BytesIO
from xml.sax.saxutils import escape

from flask import current_app, render_template
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from quotedesk import db
from quotedesk.errors import AuthorizationError
from quotedesk.models import Setting
from quotedesk.pricing import quantize_money
from quotedesk.services.access_service import AccessService
from quotedesk.services.lead_log_service import LeadLogService


def _money(value):
    return '{:,.2f}'.format(quantize_money(value))


def _hline(width_pt):
    """Thin horizontal line (grey), full frame width."""
    t = Table([['']], colWidths=[width_pt], rowHeights=[2])
    t.setStyle(TableStyle([
        ('LINEBELOW', (0, 0), (-1, -1), 0.5, colors.HexColor('#cccccc')),
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
        ('RIGHTPADDING', (0, 0), (-1, -1), 0),
    ]))
    return t


class DocumentService:
    @staticmethod
    def check_download(quote, caller):
        AccessService.require_lead_access(caller, quote.lead)
        if not AccessService.can_download(caller, quote):
            current_app.logger.warning('Blocked download of unapproved quote %s', quote.quote_number)
            raise AuthorizationError('This quote is awaiting approval and cannot be downloaded yet.')

    @staticmethod
    def render_preview(quote, caller):
        DocumentService.check_download(quote, caller)
        return render_template(
            'quotes/preview.html',
            quote=quote,
            items=quote.line_items(),
            totals=quote.totals(),
            company=Setting.company_profile(),
            money=_money,
        )

    @staticmethod
    def render_pdf(quote, caller):
        DocumentService.check_download(quote, caller)
        pdf_bytes = DocumentService._build_pdf(quote)
        LeadLogService.log(
            quote.lead_id, 'QUOTE_DOWNLOADED',
            f'{LeadLogService.actor_label(caller)} downloaded quote #{quote.quote_number} PDF',
            caller, commit=False,
        )
        db.session.commit()
        return pdf_bytes

    @staticmethod
    def filename(quote):
        safe_number = "".join(c for c in quote.quote_number if c.isalnum() or c in '-_')
        return f'Quotation_{safe_number}.pdf'

    @staticmethod
    def _build_pdf(quote):
        buffer = BytesIO()
        margin = 40
        doc = SimpleDocTemplate(
            buffer, pagesize=A4,
            leftMargin=margin, rightMargin=margin, topMargin=margin, bottomMargin=margin,
            title=f'Quotation {quote.quote_number}',
        )
        frame_width = A4[0] - 2 * margin
        styles = getSampleStyleSheet()
        grey = colors.HexColor('#555555')
        title_style = ParagraphStyle(
            'DocTitle', parent=styles['Heading1'], fontSize=18, spaceAfter=2, fontName='Helvetica-Bold',
        )
        small_style = ParagraphStyle('Small', parent=styles['Normal'], fontSize=9, textColor=grey)
        body_style = ParagraphStyle('Body', parent=styles['Normal'], fontSize=10, spaceAfter=2)
        cell_style = ParagraphStyle('Cell', parent=styles['Normal'], fontSize=9)

        company = Setting.company_profile()
        totals = quote.totals()
        story = []

        # ----- Company header -----
        story.append(Paragraph('<b>{}</b>'.format(escape(company['company_name'] or 'Company Name')), body_style))
        contact_parts = [p for p in (company['company_phone'], company['company_email'],
                                     company['company_address'].strip().replace('\n', ', ')) if p]
        if contact_parts:
            story.append(Paragraph(escape(' | '.join(contact_parts)), small_style))
        story.append(Spacer(1, 0.15 * inch))
        story.append(_hline(frame_width))
        story.append(Spacer(1, 0.15 * inch))

        story.append(Paragraph('QUOTATION', title_style))
        valid_until = quote.valid_until.strftime('%d/%m/%Y') if quote.valid_until else '-'
        ref_table = Table([
            [Paragraph('Quote No: <b>{}</b>'.format(escape(quote.quote_number)), small_style),
             Paragraph('Date: <b>{}</b>'.format(quote.quote_date.strftime('%d/%m/%Y')), small_style)],
            [Paragraph('Prepared by: {}'.format(escape(quote.prepared_by or '-')), small_style),
             Paragraph('Valid until: {}'.format(valid_until), small_style)],
        ], colWidths=[frame_width - 2.5 * inch, 2.5 * inch])
        ref_table.setStyle(TableStyle([('LEFTPADDING', (0, 0), (-1, -1), 0)]))
        story.append(ref_table)
        story.append(Spacer(1, 0.2 * inch))

        # ----- Customer -----
        story.append(Paragraph('Customer:', body_style))
        story.append(Paragraph(escape(quote.customer_name or '-'), body_style))
        for label, value in (('Attn', quote.contact_person), ('Tel', quote.phone), ('Email', quote.email)):
            if value:
                story.append(Paragraph('{}: {}'.format(label, escape(value)), small_style))
        if quote.address:
            story.append(Paragraph(escape(quote.address).replace('\n', '<br/>'), small_style))
        story.append(Spacer(1, 0.2 * inch))

        # ----- Items -----
        data = [['#', 'Item / Description', 'Qty', 'Unit Price', 'VAT %', 'Amount']]
        for item in quote.line_items():
            text = escape(item.product)
            if item.description:
                text += '<br/><font size="8" color="#555555">{}</font>'.format(escape(item.description))
            data.append([
                str(item.sl_no),
                Paragraph(text, cell_style),
                '{:g}'.format(item.quantity),
                _money(item.unit_price),
                '{:g}'.format(item.vat_percent),
                _money(item.total_price),
            ])
        col_widths = [0.35 * inch, frame_width - 4.15 * inch, 0.6 * inch, 1.1 * inch, 0.7 * inch, 1.4 * inch]
        t = Table(data, colWidths=col_widths, repeatRows=1)
        t.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('LINEBELOW', (0, 0), (-1, 0), 0.5, colors.HexColor('#cccccc')),
            ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('LEFTPADDING', (0, 0), (0, -1), 0),
            ('RIGHTPADDING', (-1, 0), (-1, -1), 0),
        ]))
        story.append(t)
        story.append(_hline(frame_width))

        # ----- Totals -----
        currency = quote.currency or ''
        discount_label = 'Discount'
        if quote.discount_mode == 'PERCENT':
            discount_label += ' ({}%)'.format(_money(quote.discount_value))
        rows = [
            ['Subtotal', _money(totals.subtotal)],
            [discount_label, '-' + _money(totals.discount_amount)],
            ['VAT', _money(totals.total_vat)],
            ['Grand Total ({})'.format(currency), _money(totals.grand_total)],
        ]
        totals_table = Table(rows, colWidths=[frame_width - 1.4 * inch, 1.4 * inch])
        totals_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('RIGHTPADDING', (-1, 0), (-1, -1), 0),
        ]))
        story.append(totals_table)
        story.append(Spacer(1, 0.3 * inch))

        # ----- Terms -----
        for heading, text in (('Payment Terms', quote.payment_terms),
                              ('Terms &amp; Conditions', quote.terms_and_conditions)):
            if text:
                story.append(Paragraph('<b>{}:</b>'.format(heading), body_style))
                story.append(Paragraph(escape(text).replace('\n', '<br/>'), small_style))
                story.append(Spacer(1, 0.15 * inch))

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()
