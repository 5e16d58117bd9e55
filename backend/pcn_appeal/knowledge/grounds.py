from .base import GroundDefinition, LegalFramework, LetterTemplate

CIVIL_ENFORCEMENT_2022 = (
    "Civil Enforcement of Road Traffic Contraventions (England) "
    "General Regulations 2022"
)

_REPRESENTATIONS_DEADLINE = "28 days from Notice to Owner for formal representations"


APPEAL_GROUNDS: tuple[GroundDefinition, ...] = (
    # --- A. The contravention did not occur ---
    GroundDefinition(
        id="A1",
        category="statutory",
        section="The Contravention Did Not Occur",
        title="Parked correctly and followed all rules",
        description=(
            "You were parked within the designated area and complied with all "
            "parking regulations at the time."
        ),
        legal_strength="high",
        evidence_required=(
            "Photographs showing correct parking position",
            "Images of relevant parking signs",
            "Witness statements if available",
        ),
        common_scenarios=(
            "Parked within marked bay lines",
            "Complied with time restrictions",
            "Followed all posted regulations",
        ),
        success_rate=85,
        case_references=("Transport Act 2000", "Traffic Management Act 2004 s.72"),
        legal_framework=LegalFramework(
            act="Traffic Management Act 2004",
            regulation=CIVIL_ENFORCEMENT_2022,
            section="Part 6, Section 72",
            deadline=_REPRESENTATIONS_DEADLINE,
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number issued "
                "on $issue_date for vehicle $registration at $location."
            ),
            legal_argument=(
                "Statutory ground: the alleged contravention did not occur "
                "($regulation). The vehicle was lawfully parked within the "
                "designated area and complied with every posted restriction. "
                "A penalty charge may only be issued where a contravention has "
                "actually taken place."
            ),
            evidence_section=(
                "Evidence submitted: $evidence_list. It shows the vehicle "
                "positioned correctly within the marked bay and in compliance "
                "with the restrictions in force."
            ),
            conclusion=(
                "No contravention occurred and I ask that the PCN be cancelled. "
                "If these representations are rejected I reserve my right to "
                "appeal to the tribunal within 28 days."
            ),
        ),
        key_phrases=("lawfully parked", "no contravention occurred"),
    ),
    GroundDefinition(
        id="A2",
        category="statutory",
        section="The Contravention Did Not Occur",
        title="Valid payment or permit displayed",
        description=(
            "You had a valid pay-and-display ticket, permit, or Blue Badge "
            "clearly displayed at the time of the alleged contravention."
        ),
        legal_strength="high",
        evidence_required=(
            "Original ticket or permit",
            "Photograph showing ticket displayed in vehicle",
            "Payment receipt or transaction record",
            "Blue Badge registration details",
        ),
        common_scenarios=(
            "Valid pay-and-display ticket shown",
            "Resident permit clearly displayed",
            "Blue Badge properly exhibited",
            "Season ticket or annual permit valid",
        ),
        legal_framework=LegalFramework(
            act="Traffic Management Act 2004",
            regulation=CIVIL_ENFORCEMENT_2022,
            deadline=_REPRESENTATIONS_DEADLINE,
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number "
                "(vehicle $registration, $location, $issue_date)."
            ),
            legal_argument=(
                "Statutory ground: the alleged contravention did not occur. A "
                "valid payment, permit or Blue Badge was on display for the "
                "whole period the vehicle was parked, so the restriction was "
                "complied with."
            ),
            evidence_section=(
                "I enclose $evidence_list confirming that valid authority to "
                "park was held and displayed."
            ),
            conclusion=(
                "As payment or a valid permit was in place, I request that the "
                "PCN be cancelled."
            ),
        ),
    ),
    GroundDefinition(
        id="A3",
        category="statutory",
        section="The Contravention Did Not Occur",
        title="Incorrect PCN details",
        description=(
            "The Penalty Charge Notice contains incorrect information such as "
            "wrong date, time, location, or vehicle registration number."
        ),
        legal_strength="high",
        evidence_required=(
            "Copy of PCN showing errors",
            "Vehicle registration document",
            "Evidence of correct location/time if disputed",
            "Photographs proving correct details",
        ),
        common_scenarios=(
            "Wrong vehicle registration recorded",
            "Incorrect date or time stated",
            "Wrong location specified",
            "Incorrect contravention code used",
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number, which "
                "contains material errors."
            ),
            legal_argument=(
                "The notice does not accurately describe the alleged "
                "contravention. A PCN must correctly state the vehicle, the date "
                "and the place of the contravention; errors in these particulars "
                "make the notice defective."
            ),
            evidence_section=(
                "The errors are shown by $evidence_list. The vehicle registration "
                "is $registration and the location recorded by me is $location."
            ),
            conclusion="The PCN is defective and should be cancelled.",
        ),
    ),
    GroundDefinition(
        id="A4",
        category="statutory",
        section="The Contravention Did Not Occur",
        title="Within official grace period",
        description=(
            "You were within the official grace period (usually 10 minutes) "
            "after your paid-for time expired."
        ),
        legal_strength="high",
        evidence_required=(
            "Original parking ticket showing expiry time",
            "PCN showing time of issue",
            "Evidence that grace period should apply",
        ),
        common_scenarios=(
            "PCN issued within 10 minutes of ticket expiry",
            "Short overstay within reasonable tolerance",
            "Council policy on grace periods",
        ),
        legal_framework=LegalFramework(
            regulation=CIVIL_ENFORCEMENT_2022,
            section="Statutory 10 minute grace period",
            deadline=_REPRESENTATIONS_DEADLINE,
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number, which "
                "was issued within the statutory grace period."
            ),
            legal_argument=(
                "Statutory ground: the alleged contravention did not occur. "
                "$regulation require a grace period of at least 10 minutes after "
                "paid time expires before a penalty charge may be issued."
            ),
            evidence_section=(
                "The ticket expiry time and the time the PCN was issued are shown "
                "in $evidence_list."
            ),
            conclusion=(
                "The PCN was issued within the grace period and must be cancelled."
            ),
        ),
    ),
    GroundDefinition(
        id="A5",
        category="statutory",
        section="The Contravention Did Not Occur",
        title="Loading or unloading goods",
        description=(
            "You were actively loading or unloading goods where this activity "
            "is permitted."
        ),
        legal_strength="high",
        evidence_required=(
            "Photographs showing loading activity",
            "Witness statements",
            "Delivery notes or receipts",
            "Evidence of goods being moved",
        ),
        common_scenarios=(
            "Commercial delivery in progress",
            "Moving house or furniture",
            "Loading shopping into vehicle",
            "Unloading work equipment",
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number: the "
                "loading and unloading exemption applies."
            ),
            legal_argument=(
                "Statutory ground: the alleged contravention did not occur. The "
                "Traffic Regulation Order covering $location permits vehicles to "
                "wait while goods are loaded or unloaded, and the vehicle was "
                "engaged in that activity throughout."
            ),
            evidence_section=(
                "Loading activity is confirmed by $evidence_list."
            ),
            conclusion=(
                "The exemption applies, no contravention occurred, and the PCN "
                "should be cancelled."
            ),
        ),
    ),
    GroundDefinition(
        id="A6",
        category="statutory",
        section="The Contravention Did Not Occur",
        title="Dropping off or picking up passenger",
        description="You had stopped briefly to drop off or pick up a passenger.",
        legal_strength="medium",
        evidence_required=(
            "Witness statement from passenger",
            "Evidence of brief stop duration",
            "CCTV footage if available",
        ),
        common_scenarios=(
            "Hospital drop-off/pick-up",
            "School collection",
            "Elderly or disabled passenger assistance",
            "Brief passenger stop",
        ),
    ),
    # --- B. Vehicle ownership ---
    GroundDefinition(
        id="B7",
        category="statutory",
        section="Issues with Vehicle Ownership",
        title="Did not own vehicle at time of contravention",
        description=(
            "You did not own the vehicle when the PCN was issued (had already "
            "sold it or had not yet purchased it)."
        ),
        legal_strength="high",
        evidence_required=(
            "Vehicle sale receipt or purchase agreement",
            "DVLA transfer documents (V5C)",
            "Insurance policy start/end dates",
            "Bank statements showing sale proceeds",
        ),
        common_scenarios=(
            "Vehicle sold before PCN date",
            "Vehicle not yet purchased",
            "Ownership transfer in progress",
            "Company vehicle transferred",
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number for "
                "vehicle $registration."
            ),
            legal_argument=(
                "Statutory ground: I was not the owner of the vehicle at the "
                "time of the alleged contravention on $issue_date. Liability "
                "rests with the owner at that time."
            ),
            evidence_section=(
                "The change of ownership is shown by $evidence_list."
            ),
            conclusion=(
                "As I was not the owner, the PCN should be cancelled and any "
                "further correspondence directed to the correct keeper."
            ),
        ),
    ),
    GroundDefinition(
        id="B8",
        category="statutory",
        section="Issues with Vehicle Ownership",
        title="Vehicle stolen or taken without consent",
        description=(
            "Your vehicle had been stolen or taken without your consent before "
            "the contravention occurred."
        ),
        legal_strength="high",
        evidence_required=(
            "Police crime reference number",
            "Insurance claim details",
            "Statement confirming theft date/time",
            "Evidence vehicle was not recovered by PCN date",
        ),
        common_scenarios=(
            "Vehicle stolen before contravention",
            "Taken without owner permission",
            "Joyriding incident",
            "Vehicle cloning suspected",
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number. "
                "Vehicle $registration had been taken without my consent."
            ),
            legal_argument=(
                "Statutory ground: the vehicle had been taken without the "
                "owner's consent before the alleged contravention, so the owner "
                "is not liable for the penalty charge."
            ),
            evidence_section="The theft is documented in $evidence_list.",
            conclusion="I request that the PCN be cancelled.",
        ),
    ),
    GroundDefinition(
        id="B9",
        category="statutory",
        section="Issues with Vehicle Ownership",
        title="Hire company responsibility",
        description=(
            "The vehicle is owned by a hire/rental company, and they are "
            "responsible for providing the hirer's details."
        ),
        legal_strength="high",
        evidence_required=(
            "Rental agreement",
            "Hire company contact details",
            "Evidence of hire company ownership",
            "Rental period documentation",
        ),
        common_scenarios=(
            "Car rental vehicle",
            "Lease company owned vehicle",
            "Fleet hire arrangement",
            "Short-term rental agreement",
        ),
    ),
    # --- C. Signs and road markings ---
    GroundDefinition(
        id="C10",
        category="statutory",
        section="Problems with Signs and Road Markings",
        title="Signs unclear, faded, or missing",
        description=(
            "Parking restriction signs were unclear, faded, damaged, or "
            "completely missing, failing to meet TSRGD 2016 standards."
        ),
        legal_strength="high",
        evidence_required=(
            "Photographs of poor signage condition",
            "Images showing faded text",
            "Evidence of missing signs",
            "Date-stamped photos",
        ),
        common_scenarios=(
            "Faded or illegible signs",
            "Damaged prohibition signs",
            "Missing parking restriction notices",
            "Weather-damaged signage",
        ),
        case_references=("TSRGD 2016", "Traffic Management Act 2004 s.77-84"),
        legal_precedents=(
            "Herron v Sunderland City Council (2011) - signs must be "
            "substantially compliant",
        ),
        legal_framework=LegalFramework(
            act="Traffic Management Act 2004",
            regulation="Traffic Signs Regulations and General Directions 2016",
            section="Schedule 1 - sign specifications and visibility",
            deadline=_REPRESENTATIONS_DEADLINE,
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number on the "
                "ground that the signage at $location does not comply with "
                "TSRGD 2016."
            ),
            legal_argument=(
                "Statutory ground: the alleged contravention did not occur "
                "because the restriction was not adequately signed. The "
                "$regulation set out mandatory sign standards, and Herron v "
                "Sunderland (2011) requires signs to be substantially compliant. "
                "The signs at $location fail the visibility and legibility "
                "requirements, so no restriction can be enforced."
            ),
            evidence_section=(
                "Photographic evidence of the defective signage is enclosed: "
                "$evidence_list."
            ),
            conclusion=(
                "Without adequate signage there is no enforceable restriction and "
                "no contravention. I request cancellation of the PCN."
            ),
        ),
        key_phrases=("TSRGD 2016", "substantially compliant", "Herron v Sunderland"),
    ),
    GroundDefinition(
        id="C11",
        category="statutory",
        section="Problems with Signs and Road Markings",
        title="Signs obscured by obstructions",
        description=(
            "Parking signs were obscured by trees, bushes, parked vehicles, or "
            "other obstructions."
        ),
        legal_strength="high",
        evidence_required=(
            "Photographs showing obscured signs",
            "Images from driver's perspective",
            "Evidence of visual obstruction",
            "Before/after photos if obstruction removed",
        ),
        common_scenarios=(
            "Tree branches blocking signs",
            "Parked vehicles obscuring notices",
            "Building work covering signs",
            "Overgrown vegetation",
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number: the "
                "restriction signs at $location were obscured."
            ),
            legal_argument=(
                "Statutory ground: the alleged contravention did not occur. An "
                "enforcement authority must ensure that signs are visible to a "
                "driver approaching the restriction. The signs were hidden and "
                "could not be read."
            ),
            evidence_section="The obstruction is shown in $evidence_list.",
            conclusion="I request that the PCN be cancelled.",
        ),
    ),
    GroundDefinition(
        id="C12",
        category="statutory",
        section="Problems with Signs and Road Markings",
        title="Road markings faded or incorrect",
        description=(
            "Parking bay lines or road markings were faded, incorrect, or not "
            "clearly visible."
        ),
        legal_strength="high",
        evidence_required=(
            "Photographs of faded markings",
            "Images showing unclear bay boundaries",
            "Evidence of marking deterioration",
            "Comparison with standard markings",
        ),
        common_scenarios=(
            "Faded parking bay lines",
            "Missing yellow lines",
            "Unclear marking boundaries",
            "Worn road surface markings",
        ),
    ),
    GroundDefinition(
        id="C13",
        category="statutory",
        section="Problems with Signs and Road Markings",
        title="No CCTV/ANPR enforcement signs",
        description=(
            "There were no clear signs indicating that CCTV or ANPR camera "
            "enforcement was in operation."
        ),
        legal_strength="medium",
        evidence_required=(
            "Photographs showing absence of camera signs",
            "Images of the enforcement area",
            "Evidence of inadequate warning signage",
        ),
        common_scenarios=(
            "CCTV enforcement without warning signs",
            "ANPR cameras not clearly indicated",
            "Missing camera operation notices",
            "Inadequate enforcement warnings",
        ),
    ),
    GroundDefinition(
        id="C14",
        category="statutory",
        section="Problems with Signs and Road Markings",
        title="Temporary restrictions improperly signed",
        description=(
            "Temporary parking restrictions were not properly or clearly signed "
            "in advance."
        ),
        legal_strength="medium",
        evidence_required=(
            "Photographs of temporary signage",
            "Evidence of insufficient notice period",
            "Images showing poor temporary sign placement",
        ),
        common_scenarios=(
            "Insufficient advance notice of restrictions",
            "Poorly placed temporary signs",
            "Event restrictions not clearly indicated",
            "Roadwork restrictions inadequately signed",
        ),
    ),
    # --- D. Procedural or administrative errors ---
    GroundDefinition(
        id="D15",
        category="procedural",
        section="Procedural or Administrative Errors",
        title="PCN issued more than 14 days late",
        description=(
            "The Penalty Charge Notice was sent by post more than 14 days after "
            "the alleged contravention."
        ),
        legal_strength="high",
        evidence_required=(
            "PCN with postmark or date stamp",
            "Evidence of contravention date",
            "Proof of 14-day rule breach",
        ),
        common_scenarios=(
            "Late postal PCN delivery",
            "Administrative delays in processing",
            "Incorrect address causing delays",
        ),
        legal_framework=LegalFramework(
            regulation=CIVIL_ENFORCEMENT_2022,
            section="Postal PCN service within 14 days",
            deadline=_REPRESENTATIONS_DEADLINE,
        ),
        template=LetterTemplate(
            opening=(
                "I make formal representations against PCN $ticket_number, which "
                "was served out of time."
            ),
            legal_argument=(
                "Procedural ground: a postal PCN must be served within 14 days "
                "of the contravention ($regulation). The contravention is dated "
                "$issue_date and the notice was served after that period expired."
            ),
            evidence_section="Dates of issue and service: $evidence_list.",
            conclusion=(
                "The authority has exceeded the statutory period and the PCN "
                "must be cancelled."
            ),
        ),
    ),
    GroundDefinition(
        id="D16",
        category="procedural",
        section="Procedural or Administrative Errors",
        title="Incorrect penalty amount",
        description=(
            "The penalty amount demanded is higher than the correct legal amount "
            "for the alleged offense."
        ),
        legal_strength="high",
        evidence_required=(
            "PCN showing incorrect amount",
            "Evidence of correct penalty charge",
            "Local authority penalty schedule",
        ),
        common_scenarios=(
            "Overcharged penalty amount",
            "Wrong penalty category applied",
            "Incorrect discount calculation",
        ),
    ),
    GroundDefinition(
        id="D17",
        category="procedural",
        section="Procedural or Administrative Errors",
        title="Significant errors in PCN or Notice to Owner",
        description=(
            "There are significant errors or missing information on the PCN or "
            "subsequent Notice to Owner."
        ),
        legal_strength="high",
        evidence_required=(
            "Copy of defective PCN/Notice",
            "Identification of specific errors",
            "Legal requirements comparison",
        ),
        common_scenarios=(
            "Missing mandatory information",
            "Incorrect legal references",
            "Wrong enforcement authority details",
            "Missing appeal instructions",
        ),
    ),
    GroundDefinition(
        id="D18",
        category="procedural",
        section="Procedural or Administrative Errors",
        title="Invalid Traffic Regulation Order",
        description=(
            "The underlying Traffic Regulation Order (TRO) that creates the "
            "parking restriction is legally invalid."
        ),
        legal_strength="high",
        evidence_required=(
            "Copy of relevant TRO",
            "Legal analysis of TRO validity",
            "Evidence of procedural failures in TRO creation",
        ),
        common_scenarios=(
            "TRO not properly consulted on",
            "Invalid TRO procedures followed",
            "TRO conflicts with other regulations",
        ),
    ),
    GroundDefinition(
        id="D19",
        category="procedural",
        section="Procedural or Administrative Errors",
        title="PCN already paid",
        description="The PCN has already been paid in full and you have proof of payment.",
        legal_strength="high",
        evidence_required=(
            "Payment receipt or confirmation",
            "Bank statement showing payment",
            "Credit card transaction record",
        ),
        common_scenarios=(
            "Payment processed but not recorded",
            "Duplicate PCN issued after payment",
            "Administrative error in payment system",
        ),
        template=LetterTemplate(
            opening="PCN $ticket_number has already been paid in full.",
            legal_argument=(
                "Procedural ground: the penalty charge was paid and the "
                "authority's records are in error. No further sum is due."
            ),
            evidence_section="Proof of payment: $evidence_list.",
            conclusion=(
                "Please update your records and confirm that the matter is closed."
            ),
        ),
    ),
    # --- E. Medical emergencies ---
    GroundDefinition(
        id="E20",
        category="mitigating",
        section="Medical Emergencies",
        title="Driver suddenly taken ill",
        description=(
            "You were the driver and were suddenly taken ill, making normal "
            "parking impossible."
        ),
        legal_strength="medium",
        evidence_required=(
            "Medical certificate or GP letter",
            "Hospital admission records",
            "Emergency services call log",
            "Witness statements",
        ),
        common_scenarios=(
            "Sudden illness while driving",
            "Medical emergency requiring immediate attention",
            "Diabetic episode or seizure",
            "Heart attack or stroke symptoms",
        ),
    ),
    GroundDefinition(
        id="E21",
        category="mitigating",
        section="Medical Emergencies",
        title="Rushing to medical emergency",
        description=(
            "You were rushing a passenger to hospital or attending to a medical "
            "emergency."
        ),
        legal_strength="medium",
        evidence_required=(
            "Hospital admission records",
            "Medical certificate",
            "Emergency services documentation",
            "Witness statement from patient/family",
        ),
        common_scenarios=(
            "Rushing to hospital with sick person",
            "Responding to family medical emergency",
            "Taking injured person for treatment",
            "Emergency medical assistance",
        ),
        template=LetterTemplate(
            opening=(
                "I write regarding PCN $ticket_number issued at $location on "
                "$issue_date."
            ),
            legal_argument=(
                "I ask the authority to exercise its discretion to cancel the "
                "penalty. At the time I was dealing with a genuine medical "
                "emergency and had no realistic alternative but to stop where I "
                "did. $description"
            ),
            evidence_section="The emergency is documented by $evidence_list.",
            conclusion=(
                "Given these compelling reasons I respectfully request that the "
                "PCN be cancelled."
            ),
        ),
    ),
    GroundDefinition(
        id="E22",
        category="mitigating",
        section="Medical Emergencies",
        title="Health professional on urgent call",
        description=(
            "You are a health professional (doctor, nurse, etc.) who was "
            "attending to a patient on an urgent call."
        ),
        legal_strength="medium",
        evidence_required=(
            "Professional registration details",
            "Employer confirmation letter",
            "Patient visit records",
            "Emergency call documentation",
        ),
        common_scenarios=(
            "District nurse emergency visit",
            "GP urgent house call",
            "Healthcare worker emergency response",
            "Medical professional attending incident",
        ),
    ),
    # --- F. Vehicle-related issues ---
    GroundDefinition(
        id="F23",
        category="mitigating",
        section="Vehicle-Related Issues",
        title="Vehicle breakdown",
        description=(
            "Your vehicle broke down and you were waiting for recovery assistance."
        ),
        legal_strength="medium",
        evidence_required=(
            "Breakdown service call-out record",
            "Recovery truck receipt",
            "Mechanic's report",
            "Photographs of broken-down vehicle",
        ),
        common_scenarios=(
            "Engine failure or mechanical breakdown",
            "Flat tire or puncture",
            "Battery failure",
            "Accident damage preventing movement",
        ),
        template=LetterTemplate(
            opening=(
                "I write regarding PCN $ticket_number for vehicle $registration "
                "at $location."
            ),
            legal_argument=(
                "The vehicle had broken down and could not be moved. A vehicle "
                "that cannot be driven away is not parked by choice, and I was "
                "waiting for recovery throughout."
            ),
            evidence_section="The breakdown is confirmed by $evidence_list.",
            conclusion="I request that the PCN be cancelled.",
        ),
    ),
    GroundDefinition(
        id="F24",
        category="mitigating",
        section="Vehicle-Related Issues",
        title="Traffic accident involvement",
        description=(
            "You were involved in an accident or had to stop to deal with its "
            "immediate aftermath."
        ),
        legal_strength="medium",
        evidence_required=(
            "Police accident report number",
            "Insurance claim reference",
            "Photographs of accident scene",
            "Witness statements",
        ),
        common_scenarios=(
            "Road traffic accident involvement",
            "Witness to serious accident",
            "Vehicle damage preventing movement",
            "Emergency services assistance at scene",
        ),
    ),
    # --- G. Other compelling reasons ---
    GroundDefinition(
        id="G25",
        category="mitigating",
        section="Other Compelling Reasons",
        title="Bereavement or funeral arrangements",
        description=(
            "You were attending to a recent bereavement or arranging funeral "
            "matters."
        ),
        legal_strength="low",
        evidence_required=(
            "Death certificate",
            "Funeral director confirmation",
            "Hospital discharge summary",
            "Bereavement counselling records",
        ),
        common_scenarios=(
            "Arranging funeral services",
            "Hospital death procedures",
            "Registering death",
            "Family bereavement support",
        ),
    ),
    GroundDefinition(
        id="G26",
        category="mitigating",
        section="Other Compelling Reasons",
        title="Directed by official",
        description=(
            "You were directed to park or wait in that location by a police "
            "officer or traffic warden."
        ),
        legal_strength="medium",
        evidence_required=(
            "Officer name and badge number",
            "Witness statements",
            "Official incident reference",
            "Written confirmation if available",
        ),
        common_scenarios=(
            "Police direction during incident",
            "Traffic management instruction",
            "Emergency services direction",
            "Official event management guidance",
        ),
    ),
    GroundDefinition(
        id="G27",
        category="mitigating",
        section="Other Compelling Reasons",
        title="Faulty payment machine",
        description=(
            "The pay-and-display machine was faulty and there was no alternative "
            "payment method available."
        ),
        legal_strength="medium",
        evidence_required=(
            "Photographs of faulty machine",
            "Machine error messages",
            "Witness statements",
            "Evidence of attempted payment",
        ),
        common_scenarios=(
            "Machine not accepting coins/cards",
            "Display screen not working",
            "Machine completely out of order",
            "Network connection failure",
        ),
        template=LetterTemplate(
            opening=(
                "I write regarding PCN $ticket_number issued at $location on "
                "$issue_date."
            ),
            legal_argument=(
                "I attempted to pay but the payment machine was out of order and "
                "no alternative method of payment was available. A motorist "
                "cannot be penalised for failing to pay when the authority's own "
                "equipment prevents payment."
            ),
            evidence_section="The fault is shown by $evidence_list.",
            conclusion="I request that the PCN be cancelled.",
        ),
    ),
    GroundDefinition(
        id="G28",
        category="mitigating",
        section="Other Compelling Reasons",
        title="Getting change for parking",
        description="You had briefly left the vehicle to get change for a parking meter.",
        legal_strength="low",
        evidence_required=(
            "Receipt from shop/business",
            "CCTV footage if available",
            "Witness statements",
            "Evidence of brief absence",
        ),
        common_scenarios=(
            "Getting change from nearby shop",
            "Using cash machine for coins",
            "Brief absence to obtain payment",
            "Seeking correct change denomination",
        ),
    ),
    GroundDefinition(
        id="G29",
        category="mitigating",
        section="Other Compelling Reasons",
        title="Crime victim",
        description=(
            "You were a victim of crime (assault, theft, etc.) immediately "
            "before the PCN was issued."
        ),
        legal_strength="medium",
        evidence_required=(
            "Police crime reference number",
            "Statement to police",
            "Medical report if injured",
            "Insurance claim details",
        ),
        common_scenarios=(
            "Victim of street crime",
            "Vehicle theft attempt",
            "Personal assault incident",
            "Reporting crime to police",
        ),
    ),
    GroundDefinition(
        id="G30",
        category="mitigating",
        section="Other Compelling Reasons",
        title="Helping in emergency",
        description="You were helping someone in an emergency situation.",
        legal_strength="low",
        evidence_required=(
            "Witness statements",
            "Emergency services reference",
            "Details of assistance provided",
            "Confirmation from person helped",
        ),
        common_scenarios=(
            "Assisting accident victim",
            "Helping lost child",
            "First aid assistance",
            "Emergency breakdown help",
        ),
    ),
)


# Used for grounds that carry no template of their own.
DEFAULT_TEMPLATES: dict[str, LetterTemplate] = {
    "statutory": LetterTemplate(
        opening=(
            "I make formal representations against PCN $ticket_number issued on "
            "$issue_date for vehicle $registration at $location."
        ),
        legal_argument=(
            "Statutory ground: $ground_title. Under $regulation a penalty "
            "charge may only be enforced where the contravention occurred and "
            "the restriction was lawfully applied."
        ),
        evidence_section="Evidence submitted: $evidence_list.",
        conclusion=(
            "I request cancellation of the PCN. Representations are made within "
            "the $deadline deadline."
        ),
    ),
    "procedural": LetterTemplate(
        opening=(
            "I make formal representations against PCN $ticket_number issued on "
            "$issue_date."
        ),
        legal_argument=(
            "Procedural ground: $ground_title. The enforcement process has not "
            "followed the requirements of $regulation, and the penalty cannot "
            "be enforced."
        ),
        evidence_section="Evidence submitted: $evidence_list.",
        conclusion="I request that the PCN be cancelled.",
    ),
    "mitigating": LetterTemplate(
        opening=(
            "I write regarding PCN $ticket_number issued at $location on "
            "$issue_date."
        ),
        legal_argument=(
            "I ask the authority to exercise its discretion to cancel the "
            "penalty because of compelling circumstances: $ground_title. "
            "$reason"
        ),
        evidence_section="Supporting evidence: $evidence_list.",
        conclusion=(
            "In light of these circumstances I respectfully ask that the PCN be "
            "cancelled."
        ),
    ),
}
