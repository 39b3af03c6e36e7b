class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    COMPILE_PROMPT = V1 + "/reasoning/compile-prompt"
    VALIDATE_RESPONSE = V1 + "/reasoning/validate-response"
    PLAN_NOTIFICATION = V1 + "/notifications/plan"


RULE = "---------------------------------------------"


SOURCE_TYPE_LABELS = {
    "case": "Case Law",
    "statute": "Statute",
    "regulation": "Regulation",
    "constitution": "Constitution",
    "treaty": "Treaty",
    "journal_article": "Journal Article",
    "book": "Book",
    "commentary": "Commentary / Textbook",
    "working_paper": "Working Paper",
    "thesis": "Thesis / Dissertation",
    "committee_report": "Committee Report",
    "law_commission_report": "Law Commission Report",
    "white_paper": "White Paper",
    "government_report": "Government Report",
    "blog_post": "Blog Post",
    "news_article": "News Article",
    "website": "Website",
    "other": "Other",
}


# Max entries rendered per chunk metadata list.
METADATA_LIST_LIMIT = 5

DEFAULT_PROJECT_TYPE = "research_paper"

PROJECT_TYPE_DESCRIPTIONS = {
    # Academic research
    "research_paper": "Academic research paper with comprehensive analysis, theoretical grounding, and scholarly rigor",
    "literature_review": "Comprehensive review synthesizing existing scholarship, identifying gaps, and positioning contributions",
    "systematic_review": "Systematic review following methodological protocols and rigorous review standards",
    "empirical_study": "Research paper based on empirical data, statistical analysis, and evidence-based conclusions",
    "theoretical_paper": "Paper focused on theoretical frameworks, conceptual analysis, and theoretical contributions",
    # Legal documents
    "legal_brief": "Formal legal brief or memorandum with clear legal arguments, case citations, and structured analysis",
    "motion_brief": "Brief supporting or opposing a motion, with focused legal arguments and case law",
    "appellate_brief": "Brief for appellate court proceedings, emphasizing legal errors and precedent",
    "legal_memorandum": "Internal legal memorandum analyzing legal issues, risks, and recommendations",
    "client_opinion": "Legal opinion letter providing client advice on legal matters and implications",
    # Case analysis
    "case_analysis": "Detailed case law analysis focusing on judicial reasoning, precedent, and doctrinal development",
    "case_note": "Brief analysis of a specific case, highlighting key legal principles and implications",
    "case_comment": "Critical commentary on a judicial decision, analyzing reasoning and potential impact",
    "comparative_case_study": "Comparative analysis across multiple cases or jurisdictions, identifying patterns and differences",
    # Policy & reform
    "policy_analysis": "Policy evaluation document examining implications, alternatives, and recommendations",
    "law_reform_paper": "Paper proposing legal reforms with policy recommendations and implementation strategies",
    "regulatory_analysis": "Analysis of regulatory frameworks, compliance requirements, and regulatory impact",
    "impact_assessment": "Assessment of legal or policy impacts, evaluating effectiveness and consequences",
    # Extended academic work
    "thesis": "Extended academic work with deep analysis, original contributions, and comprehensive coverage",
    "dissertation": "Doctoral-level extended research work with original research and significant contributions",
    "masters_thesis": "Master's level extended research work with comprehensive analysis and original insights",
    "capstone_project": "Capstone project integrating coursework and research, demonstrating mastery of subject",
    # Articles & publications
    "journal_article": "Article for academic or legal journal publication with focused argumentation and scholarly engagement",
    "law_review_article": "Article for law review publication with rigorous legal analysis and scholarly contribution",
    "opinion_piece": "Opinion piece or editorial with persuasive argumentation and clear position",
    "book_chapter": "Chapter for edited volume or monograph, contributing to broader scholarly work",
    # Practice-oriented
    "practice_guide": "Guide for legal practitioners with practical advice and procedural guidance",
    "compliance_manual": "Manual for regulatory compliance with step-by-step procedures and requirements",
    "training_material": "Educational or training material with clear explanations and practical examples",
    "other": "Custom research output with flexible structure and approach",
}

# Source types counted as primary law in coverage scoring.
PRIMARY_LAW_TYPES = frozenset({"statute", "treaty", "regulation", "constitution", "case"})
