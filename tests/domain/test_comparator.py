"""Tests for head-to-head comparison."""

import json

from resume_battle.domain import compare_documents, format_comparison_report, parse_document


class TestCompareDocuments:
    def test_breakdown_order(self, scenario_text):
        doc = parse_document(scenario_text)
        result = compare_documents(doc, doc)
        assert [row.metric for row in result.breakdown] == [
            "Experience",
            "Projects",
            "Skills",
            "Structure",
            "Keywords",
            "ATS Score",
        ]

    def test_ties_favor_first(self, scenario_text):
        doc = parse_document(scenario_text)
        result = compare_documents(doc, parse_document(scenario_text))
        assert result.winner == "first"
        assert result.total_winner == "first"
        assert all(row.winner == "first" for row in result.breakdown)

    def test_values_match_scores(self, scenario_text):
        result = compare_documents(parse_document(scenario_text), parse_document(""))
        values = {row.metric: (row.value_first, row.value_second) for row in result.breakdown}
        assert values["Experience"] == (9, 2)
        assert values["ATS Score"] == (35, 10)
        assert result.scores_first.total == 33
        assert result.scores_second.total == 2

    def test_reasons_cite_winner_details(self, scenario_text):
        result = compare_documents(parse_document(scenario_text), parse_document(""))
        reasons = {row.metric: row.reason for row in result.breakdown}
        assert reasons == {
            "Experience": "1 roles, recent exp, 2 bullets",
            "Projects": "0 projects, 2 metrics, 3 tech keywords",
            "Skills": "3 skills (3 modern tech)",
            "Structure": "2 bullets, 2/5 key sections",
            "Keywords": "2 action verbs, 2 metrics",
            "ATS Score": "5 keywords, 2/3 required sections, no contact",
        }

    def test_reason_comes_from_second_when_second_wins(self, scenario_text):
        result = compare_documents(parse_document(""), parse_document(scenario_text))
        experience = result.breakdown[0]
        assert experience.winner == "second"
        assert experience.reason == "1 roles, recent exp, 2 bullets"
        assert result.winner == "second"

    def test_ats_decides_overall_winner(self, ats_heavy_text, skills_heavy_text):
        result = compare_documents(parse_document(ats_heavy_text), parse_document(skills_heavy_text))
        assert result.scores_first.ats == 60
        assert result.scores_first.total == 16
        assert result.scores_second.total > result.scores_first.total
        assert result.scores_second.ats < result.scores_first.ats
        assert result.winner == "first"
        assert result.total_winner == "second"

    def test_ats_decides_overall_winner_reversed(self, ats_heavy_text, skills_heavy_text):
        result = compare_documents(parse_document(skills_heavy_text), parse_document(ats_heavy_text))
        assert result.winner == "second"
        assert result.total_winner == "first"

    def test_contact_reason(self, ats_heavy_text):
        result = compare_documents(parse_document(ats_heavy_text), parse_document(""))
        assert result.breakdown[-1].reason == "0 keywords, 3/3 required sections, has contact"

    def test_does_not_mutate_inputs(self, scenario_text):
        first = parse_document(scenario_text)
        second = parse_document("")
        snapshot = (first, second)
        compare_documents(first, second)
        assert (first, second) == snapshot
        assert first == parse_document(scenario_text)


class TestSerialization:
    def test_to_dict_is_json_ready(self, scenario_text):
        result = compare_documents(parse_document(scenario_text), parse_document(""))
        data = json.loads(json.dumps(result.to_dict()))
        assert data["winner"] == "first"
        assert data["total_winner"] == "first"
        assert data["scores_first"]["ats"] == 35
        assert len(data["breakdown"]) == 6
        assert data["breakdown"][0]["metric"] == "Experience"
        assert data["details_first"]["skills"] == {"total": 3, "modern": 3}


class TestComparisonReport:
    def test_report_names_winner(self, scenario_text):
        result = compare_documents(parse_document(""), parse_document(scenario_text))
        report = format_comparison_report(result, "Alice", "Bob")
        assert report.startswith("## Winner: Bob")
        assert "| Metric | Alice | Bob | Winner | Why |" in report
        assert "| ATS Score | 10 | 35 | Bob |" in report

    def test_report_notes_total_disagreement(self, ats_heavy_text, skills_heavy_text):
        result = compare_documents(parse_document(ats_heavy_text), parse_document(skills_heavy_text))
        report = format_comparison_report(result, "Alice", "Bob")
        assert "## Winner: Alice" in report
        assert "Bob has the higher category total" in report
