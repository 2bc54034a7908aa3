"""
JDG taxation regimes: reference scenarios

Objective:
1. Exact rounded figures for every variant evaluated by compare_all_forms
2. Best variant = lowest yearly total burden

Shared constants (2025 table):
- standard ZUS base 5 203,80; social stack with sickness and labour fund 34,09% -> 1 773,97542 / month
- reduced ZUS base 1 399,80; stack without sickness or labour fund 29,19% -> 408,60162 / month
- health floor 419,94 / month
"""

from typing import List

from pl_business_tax.domain.enums import ContributionBase, TaxForm

from ._schema import ExpectedJdgFigures, JdgScenario, D


JDG_SCENARIOS: List[JdgScenario] = [

    # -------------------------------------------------------------------------
    # Reference: mid-range B2B contractor
    # -------------------------------------------------------------------------

    JdgScenario(
        id="JDG_REF_001",
        description="15 000 revenue, 3 000 costs, standard ZUS with sickness, 12% lump sum",
        monthly_revenue=D("15000"),
        monthly_costs=D("3000"),
        expected=[
            ExpectedJdgFigures(
                tax_form=TaxForm.SCALE,
                yearly_social=D("21287.71"),
                yearly_health=D("11044.11"),
                yearly_tax=D("11667.93"),
                yearly_total_burden=D("43999.75"),
                yearly_net=D("100000.25"),
                monthly_net=D("8333.35"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.LINEAR,
                yearly_social=D("21287.71"),
                yearly_health=D("6012.90"),
                yearly_tax=D("23315.34"),
                yearly_total_burden=D("50615.94"),
                yearly_net=D("93384.06"),
                monthly_net=D("7782.00"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.RYCZALT,
                yearly_social=D("21287.71"),
                yearly_health=D("9233.16"),
                yearly_tax=D("21600.00"),
                yearly_total_burden=D("52120.87"),
                yearly_net=D("91879.13"),
                monthly_net=D("7656.59"),
            ),
        ],
        expected_best=TaxForm.SCALE,
        notes="Scale crosses the 120 000 threshold: 10 800 + 2 712,29496 x 32%",
    ),

    JdgScenario(
        id="JDG_IP_001",
        description="Reference figures with the 5% IP rate requested",
        monthly_revenue=D("15000"),
        monthly_costs=D("3000"),
        use_ip_box=True,
        expected=[
            ExpectedJdgFigures(
                tax_form=TaxForm.LINEAR,
                yearly_social=D("21287.71"),
                yearly_health=D("6012.90"),
                yearly_tax=D("23315.34"),
                yearly_total_burden=D("50615.94"),
                yearly_net=D("93384.06"),
                monthly_net=D("7782.00"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.LINEAR_IP_BOX,
                yearly_social=D("21287.71"),
                yearly_health=D("6012.90"),
                yearly_tax=D("6135.61"),
                yearly_total_burden=D("33436.22"),
                yearly_net=D("110563.78"),
                monthly_net=D("9213.65"),
            ),
        ],
        expected_best=TaxForm.LINEAR_IP_BOX,
        notes="Flat-rate variant is still evaluated at 19% next to the IP variant",
    ),

    # -------------------------------------------------------------------------
    # Low revenue: health floor, tax-free amount, lowest lump-sum health tier
    # -------------------------------------------------------------------------

    JdgScenario(
        id="JDG_LOW_001",
        description="5 000 revenue, 3 000 costs: contributions exceed income",
        monthly_revenue=D("5000"),
        monthly_costs=D("3000"),
        expected=[
            ExpectedJdgFigures(
                tax_form=TaxForm.SCALE,
                yearly_social=D("21287.71"),
                yearly_health=D("5039.28"),
                yearly_tax=D("0.00"),
                yearly_total_burden=D("26326.99"),
                yearly_net=D("-2326.99"),
                monthly_net=D("-193.92"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.LINEAR,
                yearly_social=D("21287.71"),
                yearly_health=D("5039.28"),
                yearly_tax=D("515.34"),
                yearly_total_burden=D("26842.32"),
                yearly_net=D("-2842.32"),
                monthly_net=D("-236.86"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.RYCZALT,
                yearly_social=D("21287.71"),
                yearly_health=D("5539.92"),
                yearly_tax=D("7200.00"),
                yearly_total_burden=D("34027.63"),
                yearly_net=D("-10027.63"),
                monthly_net=D("-835.64"),
            ),
        ],
        expected_best=TaxForm.SCALE,
        notes="Yearly revenue 60 000 sits exactly on the first lump-sum health tier bound (inclusive)",
    ),

    # -------------------------------------------------------------------------
    # Contribution-base selectors
    # -------------------------------------------------------------------------

    JdgScenario(
        id="JDG_EXEMPT_001",
        description="10 000 revenue, no costs, exemption period (health only)",
        monthly_revenue=D("10000"),
        monthly_costs=D("0"),
        contribution_base=ContributionBase.EXEMPTION_PERIOD,
        expected=[
            ExpectedJdgFigures(
                tax_form=TaxForm.SCALE,
                yearly_social=D("0.00"),
                yearly_health=D("10800.00"),
                yearly_tax=D("10800.00"),
                yearly_total_burden=D("21600.00"),
                yearly_net=D("98400.00"),
                monthly_net=D("8200.00"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.LINEAR,
                yearly_social=D("0.00"),
                yearly_health=D("5880.00"),
                yearly_tax=D("22800.00"),
                yearly_total_burden=D("28680.00"),
                yearly_net=D("91320.00"),
                monthly_net=D("7610.00"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.RYCZALT,
                yearly_social=D("0.00"),
                yearly_health=D("9233.16"),
                yearly_tax=D("14400.00"),
                yearly_total_burden=D("23633.16"),
                yearly_net=D("96366.84"),
                monthly_net=D("8030.57"),
            ),
        ],
        expected_best=TaxForm.SCALE,
        notes="Taxable base 90 000 equals the lower band exactly",
    ),

    JdgScenario(
        id="JDG_REDUCED_001",
        description="10 000 revenue, no costs, reduced new-entrant ZUS without sickness",
        monthly_revenue=D("10000"),
        monthly_costs=D("0"),
        contribution_base=ContributionBase.REDUCED_NEW_ENTRANT,
        pays_sickness=False,
        expected=[
            ExpectedJdgFigures(
                tax_form=TaxForm.SCALE,
                yearly_social=D("4903.22"),
                yearly_health=D("10358.71"),
                yearly_tax=D("10211.61"),
                yearly_total_burden=D("25473.54"),
                yearly_net=D("94526.46"),
                monthly_net=D("7877.20"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.LINEAR,
                yearly_social=D("4903.22"),
                yearly_health=D("5639.74"),
                yearly_tax=D("21868.39"),
                yearly_total_burden=D("32411.35"),
                yearly_net=D("87588.65"),
                monthly_net=D("7299.05"),
            ),
            ExpectedJdgFigures(
                tax_form=TaxForm.RYCZALT,
                yearly_social=D("4903.22"),
                yearly_health=D("9233.16"),
                yearly_tax=D("14400.00"),
                yearly_total_burden=D("28536.38"),
                yearly_net=D("91463.62"),
                monthly_net=D("7621.97"),
            ),
        ],
        expected_best=TaxForm.SCALE,
    ),
]
