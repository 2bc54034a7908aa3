# pl_business_tax/reporting/console_reporter.py
import logging

from pl_business_tax.domain.enums import TaxForm
from pl_business_tax.domain.results import RevenueSweep
from pl_business_tax.pipeline_runner import CalculationOutput
from pl_business_tax.reporting.reporting_utils import (
    BUSINESS_FORM_LABELS, CONTRIBUTION_BASE_LABELS, PAYOUT_STRATEGY_LABELS, TAX_FORM_LABELS,
    format_percent, format_pln
)


logger = logging.getLogger(__name__)


def generate_console_report(results: CalculationOutput):
    calc_input = results.calculation_input
    logger.info(f"Generating console report for tax year {results.tax_year}...")
    print(f"\n--- Porownanie form dzialalnosci, rok podatkowy {results.tax_year} (kwoty w PLN) ---")
    print(f"  Przychod miesieczny: {format_pln(calc_input.monthly_revenue)}")
    print(f"  Koszty miesieczne: {format_pln(calc_input.monthly_costs)}")
    print(f"  Skladki ZUS: {CONTRIBUTION_BASE_LABELS[calc_input.contribution_base]}"
          f"{'' if calc_input.pays_sickness else ' (bez chorobowego)'}")

    jdg = results.jdg_comparison
    if jdg is None:
        print("\n  Brak wynikow: przychod musi byc dodatni.")
        return

    # --- JDG variants ---
    print("\nJDG (jednoosobowa dzialalnosc gospodarcza), miesiecznie")
    print("  " + "-"*104)
    print(f"  {'Forma':<26} | {'ZUS spol.':>12} | {'Zdrowotna':>10} | {'Podatek':>10} | {'Obciazenie':>12} | {'Netto':>12} | {'Stopa':>7}")
    print("  " + "-"*104)
    for tax_form, result in jdg.results.items():
        marker = " *" if tax_form == jdg.best else ""
        m = result.monthly
        print(f"  {TAX_FORM_LABELS[tax_form] + marker:<26} | {format_pln(m.social_contributions):>12} | "
              f"{format_pln(m.health_contribution):>10} | {format_pln(m.tax):>10} | {format_pln(m.total_burden):>12} | "
              f"{format_pln(m.net_amount):>12} | {format_percent(result.effective_rate):>7}")
    print("  " + "-"*104)
    for tax_form, saving in jdg.savings.items():
        if tax_form != jdg.best:
            print(f"  {TAX_FORM_LABELS[jdg.best]} oszczedza rocznie {format_pln(saving)} wzgledem: {TAX_FORM_LABELS[tax_form]}")

    # --- Sp. z o.o. strategies ---
    spzoo = results.spzoo_comparison
    if spzoo is not None:
        print(f"\nSp. z o.o. (CIT {results.cit_rate.value}), miesiecznie")
        print("  " + "-"*92)
        print(f"  {'Strategia wyplaty':<32} | {'CIT':>10} | {'Pod. dyw.':>10} | {'Obciazenie/rok':>15} | {'Netto wlasciciela':>17}")
        print("  " + "-"*92)
        for strategy, result in spzoo.results.items():
            marker = " *" if strategy == spzoo.best else ""
            print(f"  {PAYOUT_STRATEGY_LABELS[strategy] + marker:<32} | {format_pln(result.monthly.corporate_tax):>10} | "
                  f"{format_pln(result.monthly.dividend_tax):>10} | {format_pln(result.yearly.total_tax_burden):>15} | "
                  f"{format_pln(result.monthly.owner_total_net):>17}")
        print("  " + "-"*92)

    # --- Verdict ---
    comparison = results.business_form_comparison
    if comparison is not None:
        print("\nWynik porownania (rocznie)")
        print(f"  Netto JDG: {format_pln(comparison.jdg_yearly_net)}")
        print(f"  Netto Sp. z o.o.: {format_pln(comparison.spzoo_yearly_net)}")
        pct = f" ({format_pln(comparison.difference_pct)}%)" if comparison.difference_pct is not None else ""
        print(f"  Korzystniejsza forma: {BUSINESS_FORM_LABELS[comparison.winner]}, roznica {format_pln(comparison.difference)}{pct}")
        if comparison.spzoo_threshold is not None:
            position = "powyzej" if comparison.above_threshold else "ponizej"
            print(f"  Sp. z o.o. dorownuje JDG od przychodu {format_pln(comparison.spzoo_threshold)} miesiecznie "
                  f"(obecny przychod jest {position} progu)")
        else:
            print("  Sp. z o.o. nie dorownuje JDG w badanym zakresie przychodow.")

    # --- Employment ---
    if results.employment_result is not None and results.employment_comparison is not None:
        employment = results.employment_result
        emp_cmp = results.employment_comparison
        print(f"\nUmowa o prace, brutto {format_pln(employment.gross_salary)} miesiecznie")
        print(f"  Skladki spoleczne pracownika: {format_pln(employment.social_contributions)}")
        print(f"  Skladka zdrowotna: {format_pln(employment.health_contribution)}")
        print(f"  Zaliczka na podatek: {format_pln(employment.income_tax)}")
        print(f"  Netto: {format_pln(employment.net_salary)}")
        print(f"  Calkowity koszt pracodawcy: {format_pln(employment.total_employer_cost)}")
        print(f"  B2B netto przy przychodzie {format_pln(emp_cmp.b2b_revenue)}: {format_pln(emp_cmp.b2b_net)} "
              f"(roznica {format_pln(emp_cmp.difference)})")
        print(f"  B2B netto przy przychodzie rownym brutto: {format_pln(emp_cmp.b2b_net_at_employment_gross)}")

    print("\n  * najkorzystniejszy wariant")
    print("  Wyliczenia maja charakter pogladowy i nie stanowia porady podatkowej.")


def print_revenue_sweep(sweep: RevenueSweep):
    forms = [tax_form for tax_form in TaxForm if any(tax_form in point.jdg_net for point in sweep)]
    header = f"  {'Przychod':>12} | " + " | ".join(f"{TAX_FORM_LABELS[f][:16]:>16}" for f in forms) + f" | {'Sp. z o.o.':>12}"
    print("\nNetto miesiecznie w zaleznosci od przychodu")
    print("  " + "-"*(len(header) - 2))
    print(header)
    print("  " + "-"*(len(header) - 2))
    for point in sweep:
        cells = " | ".join(f"{format_pln(point.jdg_net.get(f)) if f in point.jdg_net else '-':>16}" for f in forms)
        print(f"  {format_pln(point.monthly_revenue):>12} | {cells} | {format_pln(point.spzoo_net):>12}")
    print("  " + "-"*(len(header) - 2))
