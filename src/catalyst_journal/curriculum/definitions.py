"""The six-day curriculum: display content and form schema per step.

Later steps pull from earlier ones through ``SourceRef`` declarations; the
catalog validates every reference at startup.
"""

from .fields import (
    ContextSpec,
    DayDefinition,
    FieldGroup,
    FieldSpec,
    FieldType,
    Option,
    RowSource,
    SourceRef,
    StepDefinition,
)


# -- builders -----------------------------------------------------------------

def ref(day: int, step: int, field: str) -> SourceRef:
    return SourceRef(day, step, field)


def text(name, label, required=False, prefill=None, help=""):
    return FieldSpec(name, label, FieldType.SHORT_TEXT, required, prefill=prefill, help=help)


def long(name, label, required=False, prefill=None, help=""):
    return FieldSpec(name, label, FieldType.LONG_TEXT, required, prefill=prefill, help=help)


def score(name, label, low=1, high=5, required=False):
    return FieldSpec(name, label, FieldType.NUMBER, required, min_value=low, max_value=high)


def choice(name, label, options=(), options_from=None, required=False):
    return FieldSpec(
        name,
        label,
        FieldType.SELECT,
        required,
        options=tuple(Option(o, o) for o in options),
        options_from=options_from,
    )


def slots(day: int, step: int, template: str, count: int, start: int = 1) -> RowSource:
    return RowSource(ref(day, step, template), tuple(range(start, start + count)))


def group(*fields, indices=(), rows_from=None, row_labels=(), label=""):
    return FieldGroup(
        fields=tuple(fields),
        indices=tuple(indices),
        rows_from=rows_from,
        row_labels=tuple(row_labels),
        label=label,
    )


def context(name, label, *selectors, target=None, required=True):
    return ContextSpec(name, label, tuple(selectors), target=target, required=required)


# -- shared row sources ---------------------------------------------------------

PROBLEMS = slots(1, 1, "problem_{i}", 5)
IDEAS = slots(2, 2, "idea_{i}", 10)
OPTIONS = slots(3, 6, "option_{i}", 3)
ACTIONS = slots(4, 1, "action_{i}", 6)
SKILLS = slots(5, 3, "skill_{i}", 5)
KEY_RESULTS = slots(3, 4, "key_result_{i}", 3)

BASELINE_ROWS = (0, 1, 2, 3)
BASELINE_LABELS = ("KPI/metric", "Feedback", "Financial impact", "Other")

PRIORITY_PROBLEM = context(
    "priority_problem",
    "Priority problem",
    ref(1, 4, "selected_priority_problem"),
    target=ref(1, 1, "problem_{value}"),
)
PROBLEM_WHAT = context("what", "Problem statement (what)", ref(1, 5, "what"))
ROOT_CAUSE = context("root_cause", "Root cause", ref(1, 8, "root_cause"))
SOLUTION = context("solution", "Solution concept", ref(2, 5, "solution_summary"))
OBJECTIVE = context("objective", "Objective", ref(3, 4, "objective"))


# -- day 1 ----------------------------------------------------------------------

DAY_1 = DayDefinition(
    number=1,
    title="Day 1: Problem Discovery",
    subtitle="Identify, analyse and prioritise the problems worth solving",
    description="Build a fact-based picture of the problem before reaching for solutions.",
    steps=(
        StepDefinition(
            1, 1,
            title="Problem identification",
            description="List the five most pressing organisational or business problems.",
            tools=("Brainstorming",),
            importance="Every later exercise builds on this list.",
            limitations="Symptoms and problems are easy to confuse at this stage.",
            instructions="Be concrete and measurable: 'deadlines slip on 40% of projects' beats 'bad planning'.",
            items=(
                group(
                    long("problem_{i}", "Problem #{i}", required=True),
                    indices=range(1, 6),
                    label="Your five most pressing problems",
                ),
            ),
        ),
        StepDefinition(
            1, 2,
            title="Impact analysis",
            description="Pick the three most important problems and assess their impact.",
            tools=("Cost-benefit analysis", "FMEA"),
            importance="Impact and frequency separate loud problems from costly ones.",
            instructions="Choose a problem for each row and rate impact and frequency from 1 to 5.",
            items=(
                group(
                    choice("selected_problem_{i}", "Problem #{i}", options_from=PROBLEMS, required=True),
                    score("impact_{i}", "Impact (1-5)"),
                    score("frequency_{i}", "Frequency (1-5)"),
                    choice("tool_{i}", "Analysis tool", ("CBA", "FMEA", "Force Field", "ROI")),
                    long("consequence_{i}", "Consequence if left unsolved"),
                    indices=(1, 2, 3),
                ),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            1, 3,
            title="Problem analysis",
            description="Analyse the selected problem with a structured tool.",
            tools=("Pareto analysis", "Affinity diagram", "Flowchart"),
            importance="Structured analysis exposes patterns that intuition misses.",
            instructions="Choose one analysis tool and summarise what it revealed.",
            context=(
                context(
                    "selected_problem",
                    "Problem under analysis",
                    ref(1, 2, "selected_problem_1"),
                    ref(1, 2, "selected_problem_2"),
                    ref(1, 2, "selected_problem_3"),
                    target=ref(1, 1, "problem_{value}"),
                ),
            ),
            items=(
                choice("analysis_tool", "Analysis tool", ("Pareto", "Affinity", "Flowchart", "DILO"), required=True),
                long("analysis_result", "Analysis result", required=True),
            ),
        ),
        StepDefinition(
            1, 4,
            title="Prioritisation",
            description="Rate impact against effort for each problem and pick the priority.",
            tools=("Eisenhower matrix", "Pareto analysis"),
            importance="Focus beats breadth: one solved problem is worth more than five started.",
            instructions="High impact and low effort problems are the quick wins.",
            items=(
                group(
                    score("priority_impact_{i}", "Impact (1-5)"),
                    score("priority_effort_{i}", "Effort (1-5)"),
                    rows_from=PROBLEMS,
                ),
                choice("selected_priority_problem", "Priority problem", options_from=PROBLEMS, required=True),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            1, 5,
            title="Problem definition",
            description="Describe the priority problem with What, Why, Who, When, Where and How.",
            tools=("5W1H",),
            importance="A precise definition keeps the rest of the programme on target.",
            instructions="Answer each question with facts and numbers.",
            context=(PRIORITY_PROBLEM,),
            items=(
                long("what", "What is happening?", required=True),
                long("why", "Why does it matter?"),
                long("who", "Who is affected?"),
                long("when", "When does it happen?"),
                long("where", "Where does it happen?"),
                long("how", "How does it show up?"),
            ),
        ),
        StepDefinition(
            1, 6,
            title="Situation analysis",
            description="Map the strengths, weaknesses, opportunities and threats around the problem.",
            tools=("SWOT analysis", "Stakeholder analysis"),
            instructions="Keep internal factors (S, W) apart from external ones (O, T).",
            context=(PROBLEM_WHAT,),
            items=(
                long("swot_strengths", "Strengths"),
                long("swot_weaknesses", "Weaknesses"),
                long("swot_opportunities", "Opportunities"),
                long("swot_threats", "Threats"),
                long("stakeholders", "Key stakeholders"),
            ),
        ),
        StepDefinition(
            1, 7,
            title="Baseline data",
            description="Capture the current numbers that describe the problem.",
            tools=("Pulse check",),
            importance="Without a baseline there is no way to prove improvement later.",
            limitations="Some data will be estimates; rate their reliability honestly.",
            items=(
                group(
                    text("data_value_{i}", "Value"),
                    text("data_source_{i}", "Source"),
                    score("data_reliability_{i}", "Reliability (1-5)"),
                    indices=BASELINE_ROWS,
                    row_labels=BASELINE_LABELS,
                ),
            ),
        ),
        StepDefinition(
            1, 8,
            title="Root cause analysis",
            description="Ask why five times to reach the root cause.",
            tools=("5 Whys", "Ishikawa diagram"),
            importance="Solving a symptom brings the problem back.",
            instructions="Each answer becomes the subject of the next why.",
            context=(PROBLEM_WHAT,),
            items=(
                group(long("why_{i}", "Why #{i}"), indices=range(1, 6)),
                long("root_cause", "Root cause", required=True),
                long("root_cause_solution", "First idea for removing the root cause"),
            ),
        ),
    ),
)


# -- day 2 ----------------------------------------------------------------------

DAY_2 = DayDefinition(
    number=2,
    title="Day 2: Creative Solutions",
    subtitle="Generate, evaluate and shape solution ideas",
    description="Move from the root cause to a solution worth testing.",
    steps=(
        StepDefinition(
            2, 1,
            title="Reframing",
            description="Turn the root cause into a 'How might we' question.",
            tools=("Brainstorming",),
            instructions="Start with 'How might we...' and keep it open but focused.",
            context=(
                ROOT_CAUSE,
                context("what", "Problem statement (what)", ref(1, 5, "what"), required=False),
            ),
            items=(
                long("how_might_we", "How might we...", required=True),
                long("constraints", "Constraints to respect"),
            ),
        ),
        StepDefinition(
            2, 2,
            title="Idea generation",
            description="Generate up to ten ideas without judging them.",
            tools=("Brainstorming",),
            importance="Quantity first; the best idea is rarely among the first three.",
            context=(context("how_might_we", "How might we", ref(2, 1, "how_might_we")),),
            items=(group(text("idea_{i}", "Idea #{i}"), indices=range(1, 11)),),
        ),
        StepDefinition(
            2, 3,
            title="Idea clustering",
            description="Group the ideas into themes.",
            tools=("Affinity diagram",),
            items=(
                group(text("idea_theme_{i}", "Theme"), rows_from=IDEAS),
                long("themes", "Main themes"),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            2, 4,
            title="Idea evaluation",
            description="Rate each idea for impact and feasibility and select one.",
            tools=("Pareto analysis",),
            instructions="Prefer ideas that score high on both scales.",
            items=(
                group(
                    score("idea_impact_{i}", "Impact (1-5)"),
                    score("idea_feasibility_{i}", "Feasibility (1-5)"),
                    rows_from=IDEAS,
                ),
                choice("selected_idea", "Selected idea", options_from=IDEAS, required=True),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            2, 5,
            title="Solution concept",
            description="Shape the selected idea into a solution concept.",
            tools=("5W1H",),
            context=(
                context(
                    "selected_idea",
                    "Selected idea",
                    ref(2, 4, "selected_idea"),
                    target=ref(2, 2, "idea_{value}"),
                ),
                context("root_cause", "Root cause", ref(1, 8, "root_cause"), required=False),
            ),
            items=(
                long("solution_summary", "Solution in one paragraph", required=True),
                long("solution_how", "How it works"),
                long("solution_beneficiaries", "Who benefits"),
            ),
        ),
        StepDefinition(
            2, 6,
            title="Cost-benefit analysis",
            description="Weigh the costs of the solution against its benefits.",
            tools=("Cost-benefit analysis",),
            limitations="Intangible benefits are hard to price; note your assumptions.",
            context=(SOLUTION,),
            items=(
                group(
                    text("cost_{i}", "Cost #{i}"),
                    text("benefit_{i}", "Benefit #{i}"),
                    indices=(1, 2, 3),
                ),
                text("payback_period", "Expected payback period"),
                long("cba_verdict", "Verdict", required=True),
            ),
        ),
        StepDefinition(
            2, 7,
            title="Risk analysis",
            description="List what could go wrong and how you would mitigate it.",
            tools=("FMEA",),
            context=(SOLUTION,),
            items=(
                group(
                    text("failure_mode_{i}", "Failure mode #{i}"),
                    score("severity_{i}", "Severity (1-10)", 1, 10),
                    score("occurrence_{i}", "Occurrence (1-10)", 1, 10),
                    score("detection_{i}", "Detection (1-10)", 1, 10),
                    long("mitigation_{i}", "Mitigation"),
                    indices=(1, 2, 3),
                ),
            ),
        ),
        StepDefinition(
            2, 8,
            title="Solution pitch",
            description="Summarise the problem and the solution in an elevator pitch.",
            tools=("Golden Circle",),
            context=(ROOT_CAUSE, SOLUTION),
            items=(
                long("elevator_pitch", "Elevator pitch", required=True),
                text("first_step", "The very first step"),
            ),
        ),
    ),
)


# -- day 3 ----------------------------------------------------------------------

DAY_3 = DayDefinition(
    number=3,
    title="Day 3: Goals and Direction",
    subtitle="Turn the solution into measurable goals",
    description="Define purpose, targets and milestones for the change.",
    steps=(
        StepDefinition(
            3, 1,
            title="Golden Circle",
            description="Describe why, how and what for the solution.",
            tools=("Golden Circle",),
            context=(SOLUTION,),
            items=(
                long("why_purpose", "Why: purpose", required=True),
                long("how_approach", "How: approach"),
                long("what_outcome", "What: outcome"),
            ),
        ),
        StepDefinition(
            3, 2,
            title="Baseline and targets",
            description="Confirm the baseline numbers and set a target for each.",
            tools=("SMART goals",),
            instructions="Baselines are carried over from day 1; correct them if they changed.",
            items=(
                group(
                    text("baseline_{i}", "Baseline", prefill=ref(1, 7, "data_value_{i}")),
                    text("target_{i}", "Target"),
                    indices=BASELINE_ROWS,
                    row_labels=BASELINE_LABELS,
                ),
            ),
        ),
        StepDefinition(
            3, 3,
            title="SMART goal",
            description="Write one goal that is specific, measurable, achievable, relevant and time-bound.",
            tools=("SMART goals",),
            context=(
                context(
                    "baseline",
                    "Main baseline metric",
                    ref(3, 2, "baseline_0"),
                    ref(1, 7, "data_value_0"),
                    required=False,
                ),
            ),
            items=(
                long("specific", "Specific", required=True),
                text("measurable", "Measurable", prefill=ref(3, 2, "target_0")),
                long("achievable", "Achievable"),
                long("relevant", "Relevant", prefill=ref(3, 1, "why_purpose")),
                text("time_bound", "Time-bound", required=True),
            ),
        ),
        StepDefinition(
            3, 4,
            title="OKR",
            description="Set one objective and up to three key results.",
            tools=("OKR",),
            context=(context("smart_goal", "SMART goal", ref(3, 3, "specific")),),
            items=(
                long("objective", "Objective", required=True, prefill=ref(3, 3, "specific")),
                group(text("key_result_{i}", "Key result #{i}"), indices=(1, 2, 3)),
            ),
        ),
        StepDefinition(
            3, 5,
            title="Force field analysis",
            description="List what drives and what restrains reaching the objective.",
            tools=("Force field analysis",),
            context=(OBJECTIVE,),
            items=(
                long("driving_forces", "Driving forces"),
                long("restraining_forces", "Restraining forces"),
                long("force_actions", "How to strengthen drivers and weaken restraints"),
            ),
        ),
        StepDefinition(
            3, 6,
            title="Options",
            description="Describe alternative routes to the objective and choose one.",
            tools=("Cost-benefit analysis",),
            instructions="Save the options first; the choice list is built from them.",
            items=(
                group(long("option_{i}", "Option #{i}"), indices=(1, 2, 3)),
                choice("chosen_option", "Chosen option", options_from=OPTIONS, required=True),
                long("rationale", "Why this option"),
            ),
        ),
        StepDefinition(
            3, 7,
            title="Milestones",
            description="Break the chosen option into dated milestones.",
            tools=("SMART goals",),
            context=(
                context(
                    "chosen_option",
                    "Chosen option",
                    ref(3, 6, "chosen_option"),
                    target=ref(3, 6, "option_{value}"),
                ),
            ),
            items=(
                group(
                    text("milestone_{i}", "Milestone #{i}"),
                    text("milestone_date_{i}", "Due date"),
                    indices=(1, 2, 3, 4),
                ),
            ),
        ),
        StepDefinition(
            3, 8,
            title="Commitment",
            description="Commit to the objective in writing.",
            tools=("OKR",),
            context=(
                OBJECTIVE,
                context("first_milestone", "First milestone", ref(3, 7, "milestone_1"), required=False),
            ),
            items=(
                long("commitment_statement", "My commitment", required=True),
                text("accountability_partner", "Accountability partner"),
            ),
        ),
    ),
)


# -- day 4 ----------------------------------------------------------------------

DAY_4 = DayDefinition(
    number=4,
    title="Day 4: Planning and Execution",
    subtitle="Build the action plan and prepare the pilot",
    description="Translate goals into owned actions, resources and a pilot.",
    steps=(
        StepDefinition(
            4, 1,
            title="Action list",
            description="List the actions needed and sort them by urgency and importance.",
            tools=("Eisenhower matrix",),
            context=(OBJECTIVE,),
            items=(
                group(
                    text("action_{i}", "Action #{i}"),
                    choice("action_quadrant_{i}", "Quadrant", ("Do first", "Schedule", "Delegate", "Eliminate")),
                    indices=range(1, 7),
                ),
            ),
        ),
        StepDefinition(
            4, 2,
            title="Action plan",
            description="Give every action an owner and a deadline.",
            tools=("Eisenhower matrix",),
            items=(
                group(
                    text("action_owner_{i}", "Owner"),
                    text("action_deadline_{i}", "Deadline"),
                    rows_from=ACTIONS,
                ),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            4, 3,
            title="RACI",
            description="Clarify roles for each action.",
            tools=("RACI matrix",),
            instructions="Exactly one person is Accountable for each action.",
            items=(
                group(
                    text("raci_responsible_{i}", "Responsible"),
                    text("raci_accountable_{i}", "Accountable"),
                    text("raci_consulted_{i}", "Consulted"),
                    text("raci_informed_{i}", "Informed"),
                    rows_from=ACTIONS,
                ),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            4, 4,
            title="Resources",
            description="Estimate the budget, people and tools the plan needs.",
            tools=("Cost-benefit analysis",),
            context=(
                SOLUTION,
                context("cba_verdict", "Cost-benefit verdict", ref(2, 6, "cba_verdict"), required=False),
            ),
            items=(
                long("budget", "Budget"),
                long("people", "People and time"),
                long("tools_needed", "Tools and systems"),
            ),
        ),
        StepDefinition(
            4, 5,
            title="Process flow",
            description="Sketch the current and the future process.",
            tools=("Flowchart",),
            context=(
                context("analysis_result", "Day 1 analysis", ref(1, 3, "analysis_result"), required=False),
            ),
            items=(
                long("current_process", "Current process"),
                long("future_process", "Future process", required=True),
            ),
        ),
        StepDefinition(
            4, 6,
            title="Risk plan",
            description="Turn the top risk into a contingency plan.",
            tools=("FMEA",),
            context=(context("top_risk", "Top risk", ref(2, 7, "failure_mode_1")),),
            items=(
                text("risk_owner", "Risk owner"),
                long("contingency_plan", "Contingency plan", required=True, prefill=ref(2, 7, "mitigation_1")),
                long("early_warning_signs", "Early warning signs"),
            ),
        ),
        StepDefinition(
            4, 7,
            title="Communication plan",
            description="Plan who hears what, through which channel and how often.",
            tools=("Stakeholder analysis",),
            context=(context("stakeholders", "Key stakeholders", ref(1, 6, "stakeholders"), required=False),),
            items=(
                long("audiences", "Audiences"),
                long("key_messages", "Key messages"),
                text("channels", "Channels"),
                text("cadence", "Cadence"),
            ),
        ),
        StepDefinition(
            4, 8,
            title="Pilot",
            description="Define a small pilot to test the solution.",
            tools=("OKR",),
            importance="A pilot limits the cost of being wrong.",
            items=(
                long("pilot_scope", "Pilot scope", required=True),
                long("pilot_success_criteria", "Success criteria", prefill=ref(3, 4, "key_result_1")),
                text("pilot_duration", "Duration"),
            ),
        ),
    ),
)


# -- day 5 ----------------------------------------------------------------------

BELBIN_ROLES = (
    "Plant",
    "Resource Investigator",
    "Co-ordinator",
    "Shaper",
    "Monitor Evaluator",
    "Teamworker",
    "Implementer",
    "Completer Finisher",
    "Specialist",
)

GOLEMAN_STYLES = ("Coercive", "Authoritative", "Affiliative", "Democratic", "Pacesetting", "Coaching")

DAY_5 = DayDefinition(
    number=5,
    title="Day 5: Leading the Team",
    subtitle="Engage stakeholders and develop the people who carry the change",
    description="Understand the team, its gaps and your own leadership.",
    steps=(
        StepDefinition(
            5, 1,
            title="Stakeholder map",
            description="Rate stakeholders on influence and interest.",
            tools=("Stakeholder analysis",),
            items=(
                long("stakeholder_overview", "Overview", prefill=ref(1, 6, "stakeholders")),
                group(
                    text("stakeholder_{i}", "Stakeholder #{i}"),
                    score("influence_{i}", "Influence (1-5)"),
                    score("interest_{i}", "Interest (1-5)"),
                    text("engagement_{i}", "Engagement approach"),
                    indices=(1, 2, 3, 4),
                ),
            ),
        ),
        StepDefinition(
            5, 2,
            title="Team roles",
            description="Map the team members to Belbin roles.",
            tools=("Belbin team roles",),
            items=(
                group(
                    text("member_{i}", "Team member #{i}"),
                    choice("belbin_role_{i}", "Preferred role", BELBIN_ROLES),
                    indices=range(1, 6),
                ),
                long("missing_roles", "Missing or doubled roles"),
            ),
        ),
        StepDefinition(
            5, 3,
            title="Skills matrix",
            description="List the skills the change needs with required and current levels.",
            tools=("Skills matrix", "Competency matrix"),
            items=(
                group(
                    text("skill_{i}", "Skill #{i}"),
                    score("skill_required_{i}", "Required level (1-5)"),
                    score("skill_current_{i}", "Current level (1-5)"),
                    indices=range(1, 6),
                ),
            ),
        ),
        StepDefinition(
            5, 4,
            title="Competency gaps",
            description="Plan a development action for each skill gap.",
            tools=("Competency gap analysis",),
            items=(
                group(
                    long("gap_action_{i}", "Development action"),
                    text("gap_deadline_{i}", "By when"),
                    rows_from=SKILLS,
                ),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            5, 5,
            title="Leadership style",
            description="Reflect on the leadership style the situation needs.",
            tools=("Goleman leadership styles",),
            items=(
                choice("preferred_style", "My default style", GOLEMAN_STYLES, required=True),
                long("situation", "The situation the team is in"),
                long("style_adjustment", "How I will adjust"),
            ),
        ),
        StepDefinition(
            5, 6,
            title="360-degree feedback",
            description="Summarise feedback from every direction.",
            tools=("360-degree feedback",),
            items=(
                long("feedback_self", "Self"),
                long("feedback_peers", "Peers"),
                long("feedback_team", "Team"),
                long("feedback_manager", "Manager"),
                long("blind_spots", "Blind spots"),
            ),
        ),
        StepDefinition(
            5, 7,
            title="Pulse check",
            description="Design a short recurring pulse survey.",
            tools=("Pulse check",),
            items=(
                group(text("pulse_question_{i}", "Question #{i}"), indices=(1, 2, 3)),
                score("pulse_score", "Current team mood (1-10)", 1, 10),
                long("pulse_actions", "Actions from the results"),
            ),
        ),
        StepDefinition(
            5, 8,
            title="Development plan",
            description="Write your own leadership development plan.",
            tools=("Competency gap analysis",),
            context=(
                context("preferred_style", "Default style", ref(5, 5, "preferred_style"), required=False),
                context("blind_spots", "Blind spots", ref(5, 6, "blind_spots"), required=False),
            ),
            items=(
                long("development_goal", "Development goal", required=True),
                long("development_actions", "Actions"),
                long("support_needed", "Support needed"),
            ),
        ),
    ),
)


# -- day 6 ----------------------------------------------------------------------

DAY_6 = DayDefinition(
    number=6,
    title="Day 6: Results and Synthesis",
    subtitle="Measure, reflect and make the change stick",
    description="Pull the whole journey together and present it.",
    steps=(
        StepDefinition(
            6, 1,
            title="Journey recap",
            description="Review the path from problem to objective.",
            tools=("Golden Circle",),
            context=(
                PRIORITY_PROBLEM,
                ROOT_CAUSE,
                context(
                    "selected_idea",
                    "Selected idea",
                    ref(2, 4, "selected_idea"),
                    target=ref(2, 2, "idea_{value}"),
                ),
                OBJECTIVE,
            ),
            items=(long("key_insight", "Key insight of the journey", required=True),),
        ),
        StepDefinition(
            6, 2,
            title="Results measurement",
            description="Compare actual results with baselines and targets.",
            tools=("SMART goals",),
            items=(
                group(
                    text("result_baseline_{i}", "Baseline", prefill=ref(3, 2, "baseline_{i}")),
                    text("result_target_{i}", "Target", prefill=ref(3, 2, "target_{i}")),
                    text("result_actual_{i}", "Actual"),
                    indices=BASELINE_ROWS,
                    row_labels=BASELINE_LABELS,
                ),
            ),
        ),
        StepDefinition(
            6, 3,
            title="Key result review",
            description="Score each key result.",
            tools=("OKR",),
            items=(
                group(
                    score("kr_score_{i}", "Score (0-10)", 0, 10),
                    long("kr_comment_{i}", "Comment"),
                    rows_from=KEY_RESULTS,
                ),
            ),
            lock_when_missing=True,
        ),
        StepDefinition(
            6, 4,
            title="Plan review",
            description="Review how the plan and the pilot went.",
            tools=("RACI matrix",),
            context=(
                context("first_action", "First action", ref(4, 1, "action_1"), required=False),
                context("pilot_scope", "Pilot scope", ref(4, 8, "pilot_scope")),
            ),
            items=(
                long("what_worked", "What worked"),
                long("what_did_not", "What did not work"),
                long("adjustments", "Adjustments"),
            ),
        ),
        StepDefinition(
            6, 5,
            title="Team reflection",
            description="Reflect on the team and on your own development.",
            tools=("360-degree feedback", "Pulse check"),
            context=(context("development_goal", "Development goal", ref(5, 8, "development_goal")),),
            items=(
                long("team_highlights", "Highlights"),
                long("team_challenges", "Challenges"),
            ),
        ),
        StepDefinition(
            6, 6,
            title="Lessons learned",
            description="Capture the three most important lessons.",
            tools=("5 Whys",),
            items=(group(long("lesson_{i}", "Lesson #{i}"), indices=(1, 2, 3)),),
        ),
        StepDefinition(
            6, 7,
            title="Sustaining the change",
            description="Decide how the improvement stays in place.",
            tools=("RACI matrix", "Pulse check"),
            items=(
                long("standard_work", "Standard work"),
                long("control_plan", "Control plan"),
                text("sustain_owner", "Owner"),
            ),
        ),
        StepDefinition(
            6, 8,
            title="Final pitch",
            description="Present the problem, the solution and the results.",
            tools=("Golden Circle",),
            context=(PROBLEM_WHAT, SOLUTION, OBJECTIVE),
            items=(
                long("final_pitch", "Final pitch", required=True, prefill=ref(2, 8, "elevator_pitch")),
                long("next_steps", "Next steps"),
                long("ask", "What I need from leadership"),
            ),
        ),
    ),
)


CURRICULUM: tuple[DayDefinition, ...] = (DAY_1, DAY_2, DAY_3, DAY_4, DAY_5, DAY_6)
