"""Prompts for SOW / brief / timeline / kickoff document generation."""

# ==================== 제안서 기반 문서 (sow, brief) ====================

PROPOSAL_WRITER_PROMPT = """You are a professional proposal writer for {agency_name}."""

PROPOSAL_SUMMARY_TEMPLATE = """CLIENT: {client_name}
BUDGET: {budget}
TOTAL COST: ${total:,.2f}

BREAKDOWN BY PHASE:
{phases}"""

SOW_FROM_PROPOSAL_PROMPT = """Generate a comprehensive Statement of Work (SOW) document based on this pricing proposal.

{summary}

Create a professional SOW document that includes:
1. Project Overview - Brief introduction to the project
2. Scope of Work - Detailed breakdown of deliverables and services by phase
3. Timeline - Estimated project timeline based on hours (assume standard work weeks)
4. Pricing - Complete pricing breakdown matching the proposal
5. Payment Terms - Standard payment terms (e.g., 50% upfront, 50% on completion)
6. Terms & Conditions - Standard terms for this type of project

Make it professional, clear, and ready to send to the client. Use proper formatting with markdown headers, sections, and bullet points."""

BRIEF_FROM_PROPOSAL_PROMPT = """Generate a comprehensive Client Brief document based on this pricing proposal.

{summary}

Create a professional Client Brief that includes:
1. Project Summary - Overview of what will be delivered
2. Objectives - Key goals and outcomes for this project
3. Target Audience - Who this project will serve (infer from services)
4. Deliverables - Detailed list of what will be delivered by phase
5. Success Metrics - How success will be measured
6. Timeline & Milestones - Key project milestones
7. Next Steps - What the client needs to do to get started

Make it client-friendly, exciting, and clear. Use proper formatting with markdown headers, sections, and bullet points."""

# ==================== SOW 편집 ====================

EDIT_SOW_SYSTEM_PROMPT = """You are editing a Statement of Work document for {agency_name}."""

EDIT_SOW_PROMPT = """CURRENT SOW:
{current_sow}

USER'S EDIT REQUEST:
"{instruction}"

Apply the requested changes to the SOW. Return the complete updated SOW document with all changes applied. Maintain professional formatting with markdown headers (# ## ###), bullet points, and proper structure.

Return ONLY the updated SOW content, no explanations or meta-text."""

# ==================== 업로드 문서 기반 문서 ====================

UPLOAD_SYSTEM_PROMPT = """You are a proposal generation assistant for {agency_name}. Generate professional, detailed documents in the agency's style."""

UPLOAD_BASE_CONTEXT = """CONTEXT DOCUMENTS:
{documents}

CLIENT: {client_name}
PROJECT TYPE: {project_type}
DEADLINE: {deadline}

AGENCY RATES:
{rates}"""

STATEMENT_OF_WORK_PROMPT = """{base_context}

Generate a STATEMENT OF WORK in the agency's format:

**Format:**

{project_type}

Client: {client_name}
Prepared by: {agency_name}

**EXECUTIVE SUMMARY**
Write 2-3 paragraphs explaining the importance of this project and how it will help the client.

**RECOMMENDED SERVICES:**
List the services needed (e.g., Copywriting, Website Design, Website Development, SEO, etc.)

**SCOPE OF WORK**
Detail each service with descriptions matching a professional agency style.

**ESTIMATE**
Create a detailed table:
Phase | Activity | Description | Team | Hours | Rate | Total

Break down by phases. Use the agency rates above.
Show phase subtotals.
**TOTAL PROJECT COST: $X,XXX**

**TERMS & CONDITIONS**
- Estimate valid 30 days, +/- 10%
- Payment: 50% deposit, 25% at key milestone, 25% at completion
- 2 rounds of revisions per phase
- Agency Agreement governs terms

**SIGNATURES**
Client Signature: ___________________
{client_name}                    Date

Agency Signature: ___________________
{agency_name}          Date"""

INTERNAL_BRIEF_PROMPT = """{base_context}

Generate an INTERNAL TEAM BRIEFING for the agency team:

**INTERNAL TEAM BRIEFING**
{client_name} - {project_type}

**CREATIVE BRIEF**
- Project overview and objectives
- Target audience (detailed personas from context)
- Key messages and brand positioning
- Creative direction and tone
- Success metrics

**PROJECT CONTEXT**
- Client background (from uploaded docs)
- Why now? What's driving this?
- Stakeholders and decision makers
- Constraints or sensitivities

**STRATEGIC APPROACH**
- Recommended creative strategy
- Key differentiators to emphasize
- Potential challenges and mitigation
- Opportunities to exceed expectations

**TEAM NOTES**
- Important details for account managers
- Red flags to watch for
- Upsell opportunities"""

TIMELINE_PROMPT = """{base_context}

Generate a detailed PROJECT TIMELINE working backward from {deadline}:

**PROJECT TIMELINE**
{client_name} - {project_type}

Break down into phases with specific dates:

**Phase 1: Discovery & Planning (Weeks 1-2)**
- Start date
- Activities and milestones
- Client approval gates
- End date

**Phase 2: Design (Weeks X-Y)**
- Deliverables
- Review periods
- Approval gates

**Phase 3: Development/Production (Weeks X-Y)**
- Key activities
- Testing periods
- Client reviews

**Phase 4: Launch (Weeks X-Y)**
- Final preparations
- Launch date: {deadline}
- Post-launch support

Include buffer time and realistic durations based on {project_type} projects."""

KICKOFF_PRESENTATION_PROMPT = """{base_context}

Generate an INTERNAL KICKOFF PRESENTATION outline:

**KICKOFF MEETING OUTLINE**
{client_name} - {project_type}

**MEETING LOGISTICS**
- Attendees needed (roles)
- Duration: 60 minutes
- Format: In-person/Virtual

**AGENDA**
1. Client background (10 min)
2. Project objectives (10 min)
3. Scope review (15 min)
4. Timeline & milestones (10 min)
5. Team roles & responsibilities (10 min)
6. Q&A (5 min)

**KEY TALKING POINTS**

Client Context:
- [Business background]
- [Why they need this]
- [Goals and objectives]

Project Approach:
- [Creative strategy]
- [Technical approach]
- [Success criteria]

Team Roles:
- Account Manager: [responsibilities]
- Creative Director: [responsibilities]
- Designer/Developer: [responsibilities]
- Production: [responsibilities]

**RISKS & CONSIDERATIONS**
- Timeline constraints
- Budget considerations
- Technical challenges
- Client dependencies

**ACTION ITEMS**
Immediate next steps for each team member:
- Account Manager: [tasks]
- Creative: [tasks]
- Development: [tasks]
- Production: [tasks]"""
