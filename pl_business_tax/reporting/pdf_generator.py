# pl_business_tax/reporting/pdf_generator.py
import logging
from typing import List, Any, Optional
from datetime import datetime

from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, PageBreak
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY

from pl_business_tax.domain.enums import TaxForm
from pl_business_tax.pipeline_runner import CalculationOutput
from pl_business_tax.reporting.reporting_utils import (
    BUSINESS_FORM_LABELS, CONTRIBUTION_BASE_LABELS, PAYOUT_STRATEGY_LABELS, TAX_FORM_LABELS,
    create_table, format_percent, format_pln
)
import pl_business_tax.config as app_config

logger = logging.getLogger(__name__)

class PdfReportGenerator:
    def __init__(self,
                 results: CalculationOutput,
                 report_version: str = "v1.0"):
        self.results = results
        self.tax_year = results.tax_year
        self.report_version = report_version

        self.styles = self._generate_styles()
        self.story: List[Any] = []


    def _generate_styles(self):
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(name='H1', fontSize=16, leading=20, spaceAfter=10, alignment=TA_CENTER, fontName='Helvetica-Bold'))
        styles.add(ParagraphStyle(name='H2', fontSize=14, leading=18, spaceAfter=8, spaceBefore=12, fontName='Helvetica-Bold'))

        body_text_style = styles['BodyText']
        body_text_style.fontSize = 10
        body_text_style.leading = 12
        body_text_style.spaceAfter = 6
        body_text_style.fontName = 'Helvetica'

        styles.add(ParagraphStyle(name='SmallText', fontSize=8, leading=10, spaceAfter=4, fontName='Helvetica'))
        styles.add(ParagraphStyle(name='Disclaimer', fontSize=8, leading=10, spaceAfter=12, alignment=TA_JUSTIFY, fontName='Helvetica'))

        return styles

    def _add_title_page(self):
        calc_input = self.results.calculation_input
        self.story.append(Paragraph(f"Porownanie form opodatkowania dzialalnosci {self.tax_year}", self.styles['H1']))
        self.story.append(Spacer(1, 1*cm))
        self.story.append(Paragraph(f"Rok podatkowy: {self.tax_year}", self.styles['BodyText']))
        self.story.append(Paragraph(f"Podatnik: {app_config.TAXPAYER_NAME}", self.styles['BodyText']))
        self.story.append(Paragraph(f"Data sporzadzenia raportu: {datetime.now().strftime('%d.%m.%Y')}", self.styles['BodyText']))
        self.story.append(Paragraph(f"Narzedzie i wersja: pl-business-tax {self.report_version}", self.styles['BodyText']))
        self.story.append(Spacer(1, 0.5*cm))

        data = [
            ["Parametr", "Wartosc"],
            ["Przychod miesieczny (PLN)", format_pln(calc_input.monthly_revenue)],
            ["Koszty miesieczne (PLN)", format_pln(calc_input.monthly_costs)],
            ["Skladki ZUS", CONTRIBUTION_BASE_LABELS[calc_input.contribution_base]],
            ["Skladka chorobowa", "tak" if calc_input.pays_sickness else "nie"],
            ["Stawka ryczaltu", format_percent(calc_input.lump_sum_rate)],
            ["IP Box", "tak" if calc_input.use_ip_box else "nie"],
            ["Koszty autorskie 50%", "tak" if calc_input.use_notional_costs else "nie"],
            ["Stawka CIT", self.results.cit_rate.value],
        ]
        self.story.append(create_table(data, col_widths=[8*cm, 6*cm]))
        self.story.append(Spacer(1, 0.5*cm))

        disclaimer_text = ("Raport zostal wygenerowany automatycznie na podstawie podanych kwot. "
                           "Sluzy do porownania form dzialalnosci i nie stanowi porady podatkowej. "
                           "Wszystkie kwoty nalezy zweryfikowac.")
        self.story.append(Paragraph(disclaimer_text, self.styles['Disclaimer']))

    def _add_jdg_section(self):
        jdg = self.results.jdg_comparison
        if jdg is None:
            return
        self.story.append(Paragraph("JDG: porownanie form opodatkowania (rocznie)", self.styles['H2']))

        data = [["Forma", "Przychod", "Koszty", "Dochod", "ZUS spol.", "Zdrowotna", "Podatek", "Netto", "Stopa"]]
        for tax_form, result in jdg.results.items():
            y = result.yearly
            label = TAX_FORM_LABELS[tax_form] + (" *" if tax_form == jdg.best else "")
            data.append([label, format_pln(y.revenue), format_pln(y.costs), format_pln(y.income),
                         format_pln(y.social_contributions), format_pln(y.health_contribution), format_pln(y.tax),
                         format_pln(y.net_amount), format_percent(result.effective_rate)])
        self.story.append(create_table(data))
        self.story.append(Paragraph(
            f"* Najkorzystniejsza forma: {TAX_FORM_LABELS[jdg.best]}, netto miesiecznie {format_pln(jdg.best_result.monthly.net_amount)} PLN.",
            self.styles['SmallText']
        ))

    def _add_spzoo_section(self):
        spzoo = self.results.spzoo_comparison
        if spzoo is None:
            return
        self.story.append(Paragraph(f"Sp. z o.o.: strategie wyplaty (rocznie, CIT {self.results.cit_rate.value})", self.styles['H2']))

        data = [["Strategia", "Koszty zatr.", "Zysk brutto", "CIT", "Pod. dyw.", "ZUS wlasc.", "Obciazenie", "Netto"]]
        for strategy, result in spzoo.results.items():
            y = result.yearly
            label = PAYOUT_STRATEGY_LABELS[strategy] + (" *" if strategy == spzoo.best else "")
            data.append([label, format_pln(y.employment_costs), format_pln(y.profit_before_tax), format_pln(y.corporate_tax),
                         format_pln(y.dividend_tax), format_pln(y.owner_mandatory_contributions),
                         format_pln(y.total_tax_burden), format_pln(y.owner_total_net)])
        self.story.append(create_table(data))

    def _add_verdict_section(self):
        comparison = self.results.business_form_comparison
        if comparison is None:
            return
        self.story.append(Paragraph("Wynik porownania", self.styles['H2']))
        data = [
            ["Pozycja", "Wartosc"],
            ["Netto JDG (rocznie)", format_pln(comparison.jdg_yearly_net)],
            ["Netto Sp. z o.o. (rocznie)", format_pln(comparison.spzoo_yearly_net)],
            ["Korzystniejsza forma", BUSINESS_FORM_LABELS[comparison.winner]],
            ["Roznica (rocznie)", format_pln(comparison.difference)],
            ["Roznica (%)", format_pln(comparison.difference_pct) if comparison.difference_pct is not None else "-"],
            ["Prog oplacalnosci Sp. z o.o. (przychod miesiecznie)",
             format_pln(comparison.spzoo_threshold) if comparison.spzoo_threshold is not None else "brak w zakresie"],
        ]
        self.story.append(create_table(data, col_widths=[9*cm, 5*cm]))

    def _add_employment_section(self):
        employment = self.results.employment_result
        emp_cmp = self.results.employment_comparison
        if employment is None or emp_cmp is None:
            return
        self.story.append(Paragraph("Umowa o prace a B2B (miesiecznie)", self.styles['H2']))
        data = [
            ["Pozycja", "Kwota (PLN)"],
            ["Wynagrodzenie brutto", format_pln(employment.gross_salary)],
            ["Skladki spoleczne pracownika", format_pln(employment.social_contributions)],
            ["Skladka zdrowotna", format_pln(employment.health_contribution)],
            ["Zaliczka na podatek", format_pln(employment.income_tax)],
            ["Netto z umowy o prace", format_pln(employment.net_salary)],
            ["Calkowity koszt pracodawcy", format_pln(employment.total_employer_cost)],
            ["B2B netto przy podanym przychodzie", format_pln(emp_cmp.b2b_net)],
            ["B2B netto przy przychodzie rownym brutto", format_pln(emp_cmp.b2b_net_at_employment_gross)],
            ["Roznica B2B - umowa o prace", format_pln(emp_cmp.difference)],
        ]
        self.story.append(create_table(data, col_widths=[9*cm, 5*cm]))

    def _add_sweep_section(self):
        sweep = self.results.revenue_sweep
        if not sweep:
            return
        self.story.append(Paragraph("Netto miesiecznie w zaleznosci od przychodu", self.styles['H2']))
        forms = [tax_form for tax_form in TaxForm if any(tax_form in point.jdg_net for point in sweep)]
        data = [["Przychod"] + [TAX_FORM_LABELS[f] for f in forms] + ["Sp. z o.o."]]
        for point in sweep:
            row: List[Optional[str]] = [format_pln(point.monthly_revenue)]
            row.extend(format_pln(point.jdg_net[f]) if f in point.jdg_net else "-" for f in forms)
            row.append(format_pln(point.spzoo_net))
            data.append(row)
        self.story.append(create_table(data))

    def generate_report(self, output_file_path: str):
        logger.info(f"Generating PDF report: {output_file_path}")
        doc = SimpleDocTemplate(output_file_path)

        final_doc_story: List[Any] = []

        self.story = []
        self._add_title_page()
        final_doc_story.extend(self.story)

        final_doc_story.append(PageBreak())

        self.story = []
        self._add_jdg_section()
        self._add_spzoo_section()
        self._add_verdict_section()
        self._add_employment_section()
        self._add_sweep_section()
        final_doc_story.extend(self.story)

        try:
            doc.build(final_doc_story)
            logger.info(f"PDF report created: {output_file_path}")
        except Exception as e:
            logger.error(f"Failed to build PDF report: {e}", exc_info=True)
