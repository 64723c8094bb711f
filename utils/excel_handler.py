"""
Excel处理工具类
用于生成成绩上传模板、解析上传的成绩表以及导出已发布成绩
"""

import logging
import time
from io import BytesIO

import pandas as pd

from models import AgeCategory, EventResult, ResultEntry

logger = logging.getLogger(__name__)

CATEGORY_LIMIT = 5
TOP100_LIMIT = 100

GENERIC_PARSE_ERROR = 'Error processing Excel file. Please check the format.'

TEMPLATE_COLUMNS = ['Name', 'Participant ID', 'Score', 'Remarks']


def _cell(row, *names):
    """按别名取单元格，空单元格返回 None"""
    for name in names:
        if name in row.index:
            value = row[name]
            if pd.notna(value) and value != '':
                return value
    return None


def _as_text(value):
    # Excel 中的纯数字编号会被读成 1001.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class ExcelHandler:
    def __init__(self):
        self.sheet_names = {
            AgeCategory.ADULT: 'Adult',
            AgeCategory.CHILDREN: 'Children',
            AgeCategory.PRESCHOOL: 'Preschool',
        }
        self.top100_sheet_name = 'Top100'
        self.column_widths = {'A': 25, 'B': 18, 'C': 10, 'D': 30, 'E': 14}

    @staticmethod
    def match_bucket(sheet_name):
        """根据工作表名判断归属：adult/children/preschool/top100，不匹配返回 None"""
        lowered = sheet_name.lower()
        for category in AgeCategory:
            if category.value in lowered:
                return category
        if 'top100' in lowered:
            return 'top100'
        return None

    def _build_entries(self, df, event_type, category, limit):
        entries = []
        stamp = int(time.time() * 1000)
        for index, (_, row) in enumerate(df.head(limit).iterrows()):
            participant_id = _cell(row, 'participantId', 'Participant ID')
            name = _cell(row, 'name', 'Name')
            score = _cell(row, 'score', 'Score')
            remarks = _cell(row, 'remarks', 'Remarks')

            entry_category = category
            if entry_category is None:
                # top100 默认归入成人组，表中带年龄组列时以列为准
                raw_category = _cell(row, 'ageCategory', 'Age Category')
                try:
                    entry_category = AgeCategory(_as_text(raw_category).lower()) if raw_category else AgeCategory.ADULT
                except ValueError:
                    entry_category = AgeCategory.ADULT

            entries.append(ResultEntry(
                participant_id=_as_text(participant_id) if participant_id is not None else f"{event_type}-{stamp}-{index}",
                name=_as_text(name) if name is not None else 'Unknown',
                age_category=entry_category,
                position=index + 1,
                score=float(score) if score is not None else 0,
                remarks=_as_text(remarks) if remarks is not None else '',
            ))
        return entries

    @staticmethod
    def engine_for(filename):
        """.xls 由 xlrd 读取，其余按 .xlsx 交给 openpyxl"""
        if filename and filename.rsplit('.', 1)[-1].lower() == 'xls':
            return 'xlrd'
        return 'openpyxl'

    def parse_results_workbook(self, file_content, event_type, season, filename=None):
        """
        解析上传的成绩 Excel 文件

        年龄组工作表只取前 5 行，top100 工作表取前 100 行；名次按行顺序生成。
        """
        try:
            sheets = pd.read_excel(BytesIO(file_content), sheet_name=None, engine=self.engine_for(filename))

            result = EventResult(event_type=event_type, season=season)
            for sheet_name, df in sheets.items():
                bucket = self.match_bucket(str(sheet_name))
                if bucket is None:
                    logger.info(f"忽略无法识别的工作表: {sheet_name}")
                    continue
                if bucket == 'top100':
                    result.top100 = self._build_entries(df, event_type, None, TOP100_LIMIT)
                else:
                    result.top_positions[bucket] = self._build_entries(df, event_type, bucket, CATEGORY_LIMIT)

            return {
                'success': True,
                'data': result,
                'count': sum(len(entries) for _, entries in result.iter_buckets()),
            }

        except Exception as e:
            logger.error(f"成绩文件解析失败: {e}")
            return {
                'success': False,
                'error': GENERIC_PARSE_ERROR
            }

    def _write_sheet(self, writer, sheet_name, rows, columns):
        df = pd.DataFrame(rows, columns=columns)
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        worksheet = writer.sheets[sheet_name]
        for col, width in self.column_widths.items():
            worksheet.column_dimensions[col].width = width

    def generate_results_template(self, event_type):
        """
        生成成绩上传模板：Adult / Children / Preschool / Top100 四个工作表
        """
        prefix = f"{event_type[:3].upper()}24"
        samples = {
            AgeCategory.ADULT: [
                ('Abhishek Kadu', 95.5, 'Excellent creativity'),
                ('Kartik Shambharkar', 94.2, 'Great technique'),
                ('Pratik Pandey', 92.8, 'Good composition'),
                ('Punam Wagh', 91.5, 'Nice colors'),
                ('Shraddha Ramteke', 90.2, 'Creative approach'),
            ],
            AgeCategory.CHILDREN: [
                ('Gauri Dahake', 93.5, 'Amazing for age'),
                ('Shital Parise', 92.1, 'Very creative'),
                ('Chetan Urje', 90.8, 'Good details'),
                ('Zoya Khan', 89.5, 'Nice style'),
                ('Arju Shah', 88.2, 'Good effort'),
            ],
            AgeCategory.PRESCHOOL: [
                ('Rohit Bhise', 91.5, 'Exceptional talent'),
                ('Pranita Singh', 90.1, 'Great colors'),
                ('Yash Kadu', 88.8, 'Nice work'),
                ('Rina Bhasme', 87.5, 'Creative ideas'),
                ('Dolly Panbase', 86.2, 'Good attempt'),
            ],
        }

        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            for series, category in enumerate(AgeCategory, start=1):
                rows = [
                    {
                        'Name': name,
                        'Participant ID': f"{prefix}-{series}{index:03d}",
                        'Score': score,
                        'Remarks': remarks,
                    }
                    for index, (name, score, remarks) in enumerate(samples[category], start=1)
                ]
                self._write_sheet(writer, self.sheet_names[category], rows, TEMPLATE_COLUMNS)

            top100_rows = [
                {
                    'Name': f"Highlighted Artist {i + 1}" if i < 20 else f"Artist {i + 1}",
                    'Participant ID': f"{prefix}-T{i + 1:03d}",
                    'Score': 95 - i * 0.5,
                    'Remarks': 'Top 20 Highlighted' if i < 20 else 'Top 100 Artist',
                }
                for i in range(TOP100_LIMIT)
            ]
            self._write_sheet(writer, self.top100_sheet_name, top100_rows, TEMPLATE_COLUMNS)

        output.seek(0)
        return output.getvalue()

    def export_event_result(self, result):
        """
        将成绩单导出为与模板相同结构的 Excel
        """
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            for category in AgeCategory:
                rows = [
                    {
                        'Name': entry.name,
                        'Participant ID': entry.participant_id,
                        'Score': entry.score,
                        'Remarks': entry.remarks,
                    }
                    for entry in result.top_positions[category]
                ]
                self._write_sheet(writer, self.sheet_names[category], rows, TEMPLATE_COLUMNS)

            top100_rows = [
                {
                    'Name': entry.name,
                    'Participant ID': entry.participant_id,
                    'Score': entry.score,
                    'Remarks': entry.remarks,
                    'Age Category': entry.age_category.value,
                }
                for entry in result.top100
            ]
            self._write_sheet(writer, self.top100_sheet_name, top100_rows, TEMPLATE_COLUMNS + ['Age Category'])

        output.seek(0)
        return output.getvalue()


excel_handler = ExcelHandler()
