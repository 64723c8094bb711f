"""
证书生成
根据参赛编号在成绩中查找名次，生成 A4 横版 PDF 证书
"""

import logging
from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from models import TOP100_CATEGORY_NAME
from utils.event_catalog import get_event_title
from utils.helpers import get_ordinal, parse_datetime

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = landscape(A4)


def _y(top_mm):
    # 版式按自上而下的毫米坐标给出
    return PAGE_HEIGHT - top_mm * mm


def _rgb(r, g, b):
    return r / 255.0, g / 255.0, b / 255.0


class CertificateGenerator:
    def __init__(self, organisation='Kalakriti Events'):
        self.organisation = organisation

    def build_context(self, user, lookup):
        """整理证书上需要插值的字段"""
        result, entry, is_top100 = lookup
        published = parse_datetime(result.published_date)
        return {
            'name': user.full_name or entry.name,
            'position': get_ordinal(entry.position),
            'category': TOP100_CATEGORY_NAME if is_top100 else entry.age_category.display_name,
            'event_name': get_event_title(result.event_type) or result.event_type.title(),
            'season': result.season,
            'year': (published or datetime.now()).year,
            'issue_date': datetime.now().strftime('%d/%m/%Y'),
            'contestant_id': entry.participant_id,
        }

    def render(self, context):
        """按固定版式绘制证书，返回 PDF 字节"""
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
        pdf.setTitle(f"Kalakriti Certificate {context['contestant_id']}")
        center = PAGE_WIDTH / 2.0

        pdf.setFillColorRGB(*_rgb(248, 250, 252))
        pdf.rect(0, 0, PAGE_WIDTH, PAGE_HEIGHT, stroke=0, fill=1)

        pdf.setStrokeColorRGB(*_rgb(139, 92, 246))
        pdf.setLineWidth(3 * mm)
        pdf.rect(10 * mm, 10 * mm, 277 * mm, 190 * mm, stroke=1, fill=0)
        pdf.setStrokeColorRGB(*_rgb(251, 191, 36))
        pdf.setLineWidth(1 * mm)
        pdf.rect(15 * mm, 15 * mm, 267 * mm, 180 * mm, stroke=1, fill=0)

        pdf.setFont('Helvetica-Bold', 40)
        pdf.setFillColorRGB(*_rgb(88, 28, 135))
        pdf.drawCentredString(center, _y(50), 'Certificate of Achievement')

        pdf.setFont('Helvetica', 16)
        pdf.setFillColorRGB(*_rgb(100, 116, 139))
        pdf.drawCentredString(center, _y(70), 'This is to certify that')

        pdf.setFont('Helvetica-Bold', 32)
        pdf.setFillColorRGB(*_rgb(30, 41, 59))
        pdf.drawCentredString(center, _y(90), context['name'])

        pdf.setFont('Helvetica', 14)
        pdf.setFillColorRGB(*_rgb(100, 116, 139))
        pdf.drawCentredString(
            center, _y(105),
            f"has secured {context['position']} position in {context['category']}"
        )
        pdf.drawCentredString(center, _y(115), f"at {context['event_name']}")
        pdf.drawCentredString(center, _y(125), f"{context['season']} - {context['year']}")

        pdf.setFont('Helvetica-Bold', 12)
        pdf.setFillColorRGB(*_rgb(139, 92, 246))
        pdf.drawCentredString(center, _y(165), self.organisation)

        pdf.setFont('Helvetica', 10)
        pdf.setFillColorRGB(*_rgb(100, 116, 139))
        pdf.drawCentredString(center, _y(175), f"Issue Date: {context['issue_date']}")
        pdf.drawCentredString(center, _y(182), f"Contestant ID: {context['contestant_id']}")

        pdf.showPage()
        pdf.save()
        buffer.seek(0)
        return buffer.getvalue()

    def generate_for_user(self, db_manager, user):
        """查找用户成绩并生成证书；无成绩时返回 None"""
        if user is None or not user.contestant_id:
            return None
        lookup = db_manager.find_entry_for_contestant(user.contestant_id)
        if lookup is None:
            logger.info(f"参赛编号 {user.contestant_id} 暂无成绩，无法生成证书")
            return None
        context = self.build_context(user, lookup)
        logger.info(f"生成证书: {context['contestant_id']} {context['event_name']} {context['position']}")
        return self.render(context)


certificate_generator = CertificateGenerator()
