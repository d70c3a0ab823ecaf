"""One-page reference cards for the tools named by curriculum steps."""

from dataclasses import dataclass
from typing import Optional

from ..exceptions import ToolNotFoundError


@dataclass(frozen=True)
class ToolCard:
    title: str
    icon: str
    description: str
    when: str
    how_to: tuple[str, ...]
    tips: str
    example: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "title": self.title,
            "icon": self.icon,
            "description": self.description,
            "when": self.when,
            "how_to": list(self.how_to),
            "tips": self.tips,
        }
        if self.example:
            data["example"] = self.example
        return data


TOOL_LIBRARY: dict[str, ToolCard] = {
    "Brainstorming": ToolCard(
        title="Brainstorming",
        icon="fa-lightbulb",
        description="Fast, unstructured generation of many ideas.",
        when="When you need a large and varied pool of ideas quickly.",
        how_to=(
            "Name the topic or problem",
            "Set a time box of 5 to 15 minutes",
            "Write down every idea without judging it",
            "Do not edit or criticise while generating",
            "Aim for quantity over quality in this phase",
            "Group and evaluate afterwards",
        ),
        tips="Sticky notes or a shared board work well. Wild ideas are welcome.",
    ),
    "5 Whys": ToolCard(
        title="5 Whys",
        icon="fa-question-circle",
        description="Find the root cause by repeatedly asking why.",
        when="When you are looking for the real cause behind a symptom.",
        how_to=(
            "State the problem precisely",
            "Ask why it happens",
            "Answer with facts",
            "Ask why again about the previous answer",
            "Repeat at least five times",
            "The last answer is often the root cause",
        ),
        tips="Do not stop at three. The breakthrough often comes at the fifth why.",
        example=(
            "The machine stopped. Why? It overloaded. Why? The filter clogged. "
            "Why? Nobody cleaned it. Why? There is no maintenance schedule."
        ),
    ),
    "Ishikawa diagram": ToolCard(
        title="Ishikawa (fishbone) diagram",
        icon="fa-project-diagram",
        description="Visual cause and effect analysis grouped into categories.",
        when="For structured analysis of complex problems.",
        how_to=(
            "Draw the fish: the head is the problem",
            "Add main bones: people, method, machine, material, environment, measurement",
            "Collect causes on every bone",
            "Ask what causes each cause",
            "Go deeper along each bone",
            "See which bone is the densest",
        ),
        tips="Works best in a group where everyone brings a different view.",
    ),
    "SWOT analysis": ToolCard(
        title="SWOT analysis",
        icon="fa-th-large",
        description="Strategic situation analysis from four perspectives.",
        when="For strategic planning and assessing your position.",
        how_to=(
            "Draw a 2x2 grid",
            "Strengths: internal and positive",
            "Weaknesses: internal and negative",
            "Opportunities: external and positive",
            "Threats: external and negative",
            "Turn the grid into actions",
        ),
        tips="Be honest about weaknesses. Use strengths to seize opportunities.",
    ),
    "Pareto analysis": ToolCard(
        title="Pareto analysis (80/20)",
        icon="fa-chart-bar",
        description="Find the few causes that produce most of the effect.",
        when="When you must choose where to focus limited effort.",
        how_to=(
            "List the causes or categories",
            "Measure how often each occurs",
            "Sort them in descending order",
            "Compute the cumulative percentage",
            "Draw the bar and line chart",
            "Focus on the causes that make up 80 percent",
        ),
        tips="Use real data rather than impressions.",
    ),
    "Cost-benefit analysis": ToolCard(
        title="Cost-benefit analysis",
        icon="fa-balance-scale",
        description="Compare the costs of a decision with its expected benefits.",
        when="Before committing money or time to a solution.",
        how_to=(
            "List every cost, one-off and recurring",
            "List every benefit, tangible and intangible",
            "Put a value on each item",
            "Compare totals over the same period",
            "Estimate the payback time",
            "Decide and record the assumptions",
        ),
        tips="Hidden costs such as training and change effort are easy to forget.",
    ),
    "FMEA": ToolCard(
        title="FMEA (Failure Mode and Effects Analysis)",
        icon="fa-exclamation-triangle",
        description="Systematic analysis of what can go wrong and how badly.",
        when="When introducing a new process, product or solution.",
        how_to=(
            "List the possible failure modes",
            "Rate severity from 1 to 10",
            "Rate occurrence from 1 to 10",
            "Rate detectability from 1 to 10",
            "Multiply them into a risk priority number",
            "Plan mitigations for the highest numbers",
        ),
        tips="Revisit the ratings after mitigations are in place.",
    ),
    "Golden Circle": ToolCard(
        title="Golden Circle (Why, How, What)",
        icon="fa-bullseye",
        description="Start from purpose, then approach, then outcome.",
        when="When you need to explain or sell a change.",
        how_to=(
            "Why: the purpose and belief behind it",
            "How: the approach that makes it different",
            "What: the concrete outcome or product",
            "Communicate from the inside out",
        ),
        tips="People buy into why you do something before what you do.",
    ),
    "SMART goals": ToolCard(
        title="SMART goals",
        icon="fa-crosshairs",
        description="Goals that are specific, measurable, achievable, relevant and time-bound.",
        when="When turning an intention into a trackable goal.",
        how_to=(
            "Specific: what exactly will change",
            "Measurable: which number shows it",
            "Achievable: is it realistic with your resources",
            "Relevant: does it serve the larger objective",
            "Time-bound: by when",
        ),
        tips="Write the goal as one sentence that passes all five checks.",
    ),
    "OKR": ToolCard(
        title="OKR (Objectives and Key Results)",
        icon="fa-flag-checkered",
        description="An inspiring objective with a few measurable key results.",
        when="For aligning a team around ambitious, measurable outcomes.",
        how_to=(
            "Write one qualitative, inspiring objective",
            "Add two to five measurable key results",
            "Make key results outcomes rather than tasks",
            "Review progress regularly",
            "Score each key result at the end of the period",
        ),
        tips="Reaching about 70 percent of an ambitious OKR is a success.",
    ),
    "Eisenhower matrix": ToolCard(
        title="Eisenhower matrix",
        icon="fa-th",
        description="Sort tasks by urgency and importance.",
        when="When there are more tasks than time.",
        how_to=(
            "Urgent and important: do first",
            "Important, not urgent: schedule",
            "Urgent, not important: delegate",
            "Neither: eliminate",
        ),
        tips="Most of the long-term value sits in the important but not urgent quadrant.",
    ),
    "RACI matrix": ToolCard(
        title="RACI matrix",
        icon="fa-users-cog",
        description="Clarify who is Responsible, Accountable, Consulted and Informed.",
        when="When several people share work on the same actions.",
        how_to=(
            "List the actions or deliverables",
            "List the people or roles",
            "Assign exactly one Accountable per action",
            "Assign the Responsible doers",
            "Mark who is Consulted and who is Informed",
        ),
        tips="Too many Cs slow decisions down.",
    ),
    "Goleman leadership styles": ToolCard(
        title="Goleman's six leadership styles",
        icon="fa-user-tie",
        description="Coercive, authoritative, affiliative, democratic, pacesetting and coaching styles.",
        when="When choosing how to lead in a given situation.",
        how_to=(
            "Identify the situation and the team's state",
            "Pick the style that fits it",
            "Notice your default style",
            "Practise switching deliberately",
        ),
        tips="Effective leaders use several styles depending on the situation.",
    ),
    "Pulse check": ToolCard(
        title="Pulse check",
        icon="fa-heartbeat",
        description="A short, frequent survey of team sentiment.",
        when="To track morale and engagement during a change.",
        how_to=(
            "Pick three to five short questions",
            "Use a consistent scale",
            "Run it at a fixed cadence",
            "Share the results with the team",
            "Act on what you learn",
        ),
        tips="Keep it anonymous and short so people keep answering.",
    ),
    "Stakeholder analysis": ToolCard(
        title="Stakeholder analysis",
        icon="fa-sitemap",
        description="Map who is affected by the change and how much they matter.",
        when="Before planning communication and engagement.",
        how_to=(
            "List everyone affected by or affecting the change",
            "Rate their influence",
            "Rate their interest",
            "Place them on a power and interest grid",
            "Plan how to engage each quadrant",
        ),
        tips="Do not forget quiet stakeholders with high influence.",
    ),
    "Flowchart": ToolCard(
        title="Flowchart",
        icon="fa-stream",
        description="Visual map of the steps and decisions in a process.",
        when="To understand, document or redesign a process.",
        how_to=(
            "Define where the process starts and ends",
            "List the steps in order",
            "Add decision points",
            "Draw with standard symbols",
            "Walk the chart with the people who run the process",
        ),
        tips="Map the process as it really runs, not as it is documented.",
    ),
    "Belbin team roles": ToolCard(
        title="Belbin team roles",
        icon="fa-puzzle-piece",
        description="Nine behavioural roles that make a balanced team.",
        when="When forming a team or diagnosing team friction.",
        how_to=(
            "Learn the nine roles",
            "Identify each member's preferred roles",
            "Spot missing or doubled roles",
            "Adjust assignments to cover gaps",
        ),
        tips="Everyone has two or three preferred roles, not just one.",
    ),
    "Skills matrix": ToolCard(
        title="Skills matrix",
        icon="fa-table",
        description="Grid of the skills a team needs against current proficiency.",
        when="For planning training and staffing.",
        how_to=(
            "List the skills the work requires",
            "Set the required level for each",
            "Rate the current level",
            "Highlight the gaps",
        ),
        tips="Rate with evidence, not impressions.",
    ),
    "360-degree feedback": ToolCard(
        title="360-degree feedback",
        icon="fa-sync",
        description="Feedback collected from self, peers, reports and managers.",
        when="For leadership development and finding blind spots.",
        how_to=(
            "Choose the competencies to assess",
            "Collect feedback from every direction",
            "Compare self-rating with others' ratings",
            "Identify blind spots and strengths",
            "Turn insights into a development plan",
        ),
        tips="Anonymity makes the feedback more honest.",
    ),
    "Competency gap analysis": ToolCard(
        title="Competency gap analysis",
        icon="fa-chart-line",
        description="The difference between required and current competency.",
        when="When planning development for a person or team.",
        how_to=(
            "Define the required competencies",
            "Assess the current level",
            "Compute the gap",
            "Prioritise the biggest gaps",
            "Plan an action for each",
        ),
        tips="Close the gaps that matter most to the goal first.",
    ),
    "Competency matrix": ToolCard(
        title="Competency matrix",
        icon="fa-border-all",
        description="Competencies per role with expected proficiency levels.",
        when="For defining roles and career paths.",
        how_to=(
            "List the roles",
            "List the competencies",
            "Define the expected level per role",
            "Use it as the basis for assessment",
        ),
        tips="Keep the level descriptions concrete and observable.",
    ),
    "5W1H": ToolCard(
        title="5W1H",
        icon="fa-list-ul",
        description="Describe a problem with What, Why, Who, When, Where and How.",
        when="When a problem statement is vague.",
        how_to=(
            "What is happening",
            "Why does it matter",
            "Who is affected",
            "When does it happen",
            "Where does it happen",
            "How does it show up",
        ),
        tips="Answer with facts and numbers where possible.",
    ),
    "Force field analysis": ToolCard(
        title="Force field analysis",
        icon="fa-arrows-alt-h",
        description="Weigh the forces driving a change against those restraining it.",
        when="Before launching a change, to see what helps and what blocks it.",
        how_to=(
            "Describe the desired change",
            "List the driving forces",
            "List the restraining forces",
            "Rate the strength of each",
            "Plan to strengthen drivers and weaken restraints",
        ),
        tips="Removing a restraint is often easier than adding a driver.",
    ),
    "Affinity diagram": ToolCard(
        title="Affinity diagram",
        icon="fa-object-group",
        description="Group many ideas or facts into natural themes.",
        when="After brainstorming or when sorting lots of qualitative data.",
        how_to=(
            "Write each idea on its own note",
            "Sort silently into groups",
            "Name each group",
            "Discuss and merge groups",
        ),
        tips="Let the groups emerge instead of starting from categories.",
    ),
}


def get_tool(name: str) -> ToolCard:
    """Look up a tool card by the name used in the curriculum."""
    try:
        return TOOL_LIBRARY[name]
    except KeyError:
        raise ToolNotFoundError(name)
